import unittest

from storefront.catalog import normalize_extra_images, page_bounds, paginate, store_image
from storefront.db import ProductFilter, ProductRecord
from storefront.errors import InvalidRequestError, UploadTooLargeError
from storefront.storage import InMemoryImageStorage


class PaginationTests(unittest.TestCase):
    def test_page_bounds(self):
        self.assertEqual(page_bounds(1, 10), (0, 10))
        self.assertEqual(page_bounds(3, 4), (8, 12))
        self.assertEqual(page_bounds(0, -5), (0, 1))

    def test_exact_multiple_has_no_next_page(self):
        items = list(range(20))
        page = paginate(items, 2, 10)
        self.assertEqual(page["results"], list(range(10, 20)))
        self.assertIsNone(page["next"])
        self.assertEqual(page["previous"], {"page": 1, "limit": 10})

    def test_page_past_the_end_is_empty(self):
        page = paginate(list(range(5)), 3, 10)
        self.assertEqual(page["results"], [])
        self.assertIsNone(page["next"])
        self.assertEqual(page["previous"], {"page": 2, "limit": 10})

    def test_single_page(self):
        page = paginate(["a"], 1, 10)
        self.assertEqual(page, {"results": ["a"], "next": None, "previous": None})


class ExtraImageTests(unittest.TestCase):
    def test_accepts_list_and_json(self):
        self.assertEqual(normalize_extra_images(["/a.png", ""]), ["/a.png"])
        self.assertEqual(normalize_extra_images('["/a.png", "/b.png"]'), ["/a.png", "/b.png"])

    def test_ignores_garbage(self):
        self.assertEqual(normalize_extra_images("not json"), [])
        self.assertEqual(normalize_extra_images('{"a": 1}'), [])
        self.assertEqual(normalize_extra_images(None), [])
        self.assertEqual(normalize_extra_images("   "), [])


class StoreImageTests(unittest.TestCase):
    def test_rejects_type_and_size(self):
        storage = InMemoryImageStorage()
        with self.assertRaises(InvalidRequestError):
            store_image(storage, b"x", filename="a.gif", content_type="image/gif", max_bytes=10)
        with self.assertRaises(UploadTooLargeError):
            store_image(storage, b"x" * 11, filename="a.png", content_type="image/png", max_bytes=10)
        self.assertEqual(storage.stored_objects, {})

    def test_uses_content_type_extension_when_name_has_none(self):
        storage = InMemoryImageStorage()
        url = store_image(storage, b"x", filename="blob", content_type="image/webp", max_bytes=10)
        self.assertTrue(url.endswith(".webp"))


class ProductFilterTests(unittest.TestCase):
    def test_price_filter_skips_products_without_discount(self):
        product = ProductRecord(name="Bar", original_price=3.0)
        self.assertFalse(ProductFilter(max_price=10).matches(product))
        self.assertTrue(ProductFilter().matches(product))


if __name__ == "__main__":
    unittest.main()
