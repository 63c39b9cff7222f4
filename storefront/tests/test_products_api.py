import json
import unittest
from unittest.mock import patch

from support import ApiTestCase

from storefront.config import Settings
from storefront.db import ReviewRecord

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class ProductApiTests(ApiTestCase):
    def test_list_products_paginates(self):
        for i in range(12):
            self.make_product(name=f"Item {i:02d}")

        first = self.client.get("/api/products").json()
        self.assertEqual(len(first["results"]), 10)
        self.assertEqual(first["next"], {"page": 2, "limit": 10})
        self.assertIsNone(first["previous"])

        second = self.client.get("/api/products", params={"page": 2}).json()
        self.assertEqual([p["name"] for p in second["results"]], ["Item 10", "Item 11"])
        self.assertIsNone(second["next"])
        self.assertEqual(second["previous"], {"page": 1, "limit": 10})

    def test_list_products_filters(self):
        self.make_product(name="Whey Protein", category="supplements", discounted_price=25.0)
        self.make_product(name="Yoga Mat", category="gear", discounted_price=15.0, stock=0)
        self.make_product(name="Protein Bar", category="snacks", discounted_price=3.0)

        def names(**params):
            results = self.client.get("/api/products", params=params).json()["results"]
            return sorted(p["name"] for p in results)

        self.assertEqual(names(search="protein"), ["Protein Bar", "Whey Protein"])
        self.assertEqual(names(category="gear"), ["Yoga Mat"])
        self.assertEqual(len(names(category="all")), 3)
        self.assertEqual(names(price=15), ["Protein Bar", "Yoga Mat"])
        self.assertEqual(names(availability="in-stock"), ["Protein Bar", "Whey Protein"])
        self.assertEqual(names(availability="out-of-stock"), ["Yoga Mat"])

    def test_get_product(self):
        product = self.make_product()
        response = self.client.get(f"/api/products/{product.product_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Protein Powder")
        self.assertEqual(response.json()["images"], [])
        self.assertEqual(self.client.get("/api/products/missing").status_code, 404)

    def test_writes_require_admin(self):
        product = self.make_product()
        self.assertEqual(self.client.post("/api/products", data={"name": "x"}).status_code, 401)
        self.login_new_user()
        self.assertEqual(
            self.client.delete(f"/api/products/{product.product_id}").status_code, 403
        )

    def test_create_product_with_upload(self):
        self.login_admin()
        response = self.client.post(
            "/api/products",
            data={
                "name": "Kettlebell",
                "original_price": "45",
                "discounted_price": "39.5",
                "category": "gear",
                "stock": "7",
                "additional_images": json.dumps(["/img/a.png", "/img/b.png"]),
            },
            files={"image_file": ("bell.png", PNG_BYTES, "image/png")},
        )
        self.assertEqual(response.status_code, 201, response.text)
        product = response.json()["product"]
        self.assertEqual(product["stock"], 7)
        self.assertTrue(product["image_url"].startswith("/uploads/"))
        self.assertTrue(product["image_url"].endswith(".png"))
        self.assertEqual(product["images"], ["/img/a.png", "/img/b.png"])
        self.assertEqual(len(self.storage.stored_objects), 1)

    def test_create_product_rejects_bad_image_type(self):
        self.login_admin()
        response = self.client.post(
            "/api/products",
            data={"name": "Kettlebell", "original_price": "45"},
            files={"image_file": ("bell.gif", b"GIF89a", "image/gif")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid image type")
        self.assertEqual(self.db.list_products(), [])

    @patch("storefront.routes.get_settings")
    def test_create_product_rejects_oversized_image(self, mock_settings):
        mock_settings.return_value = Settings(max_upload_bytes=16)
        self.login_admin()
        response = self.client.post(
            "/api/products",
            data={"name": "Kettlebell", "original_price": "45"},
            files={"image_file": ("bell.png", PNG_BYTES, "image/png")},
        )
        self.assertEqual(response.status_code, 413)
        self.assertEqual(self.db.list_products(), [])
        self.assertEqual(self.storage.stored_objects, {})

    def test_update_keeps_unspecified_fields(self):
        product = self.make_product(image_url="/uploads/old.png")
        self.login_admin()

        response = self.client.put(
            f"/api/products/{product.product_id}",
            data={"stock": "3", "additional_images": "not json"},
        )
        self.assertEqual(response.status_code, 200)
        updated = self.db.get_product(product.product_id)
        self.assertEqual(updated.stock, 3)
        self.assertEqual(updated.name, "Protein Powder")
        self.assertEqual(updated.image_url, "/uploads/old.png")

        missing = self.client.put("/api/products/missing", data={"stock": "1"})
        self.assertEqual(missing.status_code, 404)

    def test_delete_product(self):
        product = self.make_product()
        self.login_admin()
        response = self.client.delete(f"/api/products/{product.product_id}")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(self.db.get_product(product.product_id))
        self.assertEqual(
            self.client.delete(f"/api/products/{product.product_id}").status_code, 404
        )


class ReviewApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.product = self.make_product()

    def test_reviews_require_login(self):
        path = f"/api/products/{self.product.product_id}/reviews"
        self.assertEqual(self.client.get(path).status_code, 401)
        self.assertEqual(self.client.post(path, json={"rating": 5}).status_code, 401)

    def test_post_and_list_reviews(self):
        user = self.login_new_user()
        path = f"/api/products/{self.product.product_id}/reviews"

        self.assertEqual(self.client.get(path).status_code, 404)

        created = self.client.post(path, json={"rating": 4, "comment_text": "Mixes well"})
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["review"]["user_id"], user.user_id)

        listing = self.client.get(path).json()
        self.assertEqual(listing["count"], 1)
        self.assertEqual(listing["reviews"][0]["user"]["username"], "sam")

    def test_review_rating_bounds(self):
        self.login_new_user()
        path = f"/api/products/{self.product.product_id}/reviews"
        self.assertEqual(self.client.post(path, json={"rating": 6}).status_code, 422)
        self.assertEqual(self.client.post("/api/products/missing/reviews", json={"rating": 3}).status_code, 404)

    def test_reviews_are_paged_newest_first(self):
        user = self.login_new_user()
        for i in range(3):
            self.db.add_review(
                ReviewRecord(
                    product_id=self.product.product_id,
                    user_id=user.user_id,
                    rating=5,
                    comment_text=f"review {i}",
                    created_at=float(i),
                )
            )
        path = f"/api/products/{self.product.product_id}/reviews"

        first = self.client.get(path, params={"page": 1, "limit": 2}).json()
        self.assertEqual([r["comment_text"] for r in first["reviews"]], ["review 2", "review 1"])

        clamped = self.client.get(path, params={"page": 0, "limit": 0}).json()
        self.assertEqual((clamped["page"], clamped["limit"]), (1, 1))
        self.assertEqual(clamped["reviews"][0]["comment_text"], "review 2")

        self.assertEqual(self.client.get(path, params={"page": 3, "limit": 2}).status_code, 404)


if __name__ == "__main__":
    unittest.main()
