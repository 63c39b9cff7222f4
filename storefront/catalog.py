"""
Product catalog, product images and reviews.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Optional

from storefront.db import DbClient, ProductFilter, ProductImageRecord, ProductRecord, ReviewRecord
from storefront.errors import InvalidRequestError, NotFoundError, UploadTooLargeError
from storefront.schemas import ProductFields
from storefront.storage import ALLOWED_IMAGE_TYPES, ImageStorage, make_upload_filename

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def page_bounds(page: int, limit: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice for a 1-based page; both inputs clamp to 1."""
    page = max(page, 1)
    limit = max(limit, 1)
    return (page - 1) * limit, page * limit


def paginate(items: list, page: int, limit: int) -> dict:
    page = max(page, 1)
    limit = max(limit, 1)
    start, end = page_bounds(page, limit)
    return {
        "results": items[start:end],
        "next": {"page": page + 1, "limit": limit} if end < len(items) else None,
        "previous": {"page": page - 1, "limit": limit} if start > 0 else None,
    }


def normalize_extra_images(value: Any) -> list[str]:
    """Accept a list or a JSON array string; anything else means no images."""
    if isinstance(value, str) and value.strip():
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if isinstance(value, list):
        return [str(url) for url in value if url]
    return []


def store_image(
    storage: ImageStorage,
    data: bytes,
    *,
    filename: Optional[str],
    content_type: Optional[str],
    max_bytes: int,
) -> str:
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidRequestError("Invalid image type")
    if len(data) > max_bytes:
        raise UploadTooLargeError(f"Image exceeds {max_bytes} bytes")
    return storage.save(make_upload_filename(filename, content_type), data)


def list_products(db: DbClient, product_filter: ProductFilter, page: int, limit: int) -> dict:
    products = db.list_products(product_filter)
    page_data = paginate(products, page, limit)
    page_data["results"] = [p.as_dict() for p in page_data["results"]]
    return page_data


def get_product_or_404(db: DbClient, product_id: str) -> ProductRecord:
    product = db.get_product(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def product_detail(db: DbClient, product: ProductRecord) -> dict:
    payload = product.as_dict()
    payload["images"] = [i.image_url for i in db.list_product_images(product.product_id)]
    return payload


def create_product(
    db: DbClient,
    fields: ProductFields,
    *,
    image_url: Optional[str] = None,
    additional_images: Optional[list[str]] = None,
) -> ProductRecord:
    if not fields.name or fields.original_price is None:
        raise InvalidRequestError("Product name and original price are required")
    product = db.add_product(
        ProductRecord(image_url=image_url, **fields.model_dump(exclude_none=True))
    )
    if additional_images:
        db.add_product_images(
            [ProductImageRecord(product_id=product.product_id, image_url=url) for url in additional_images]
        )
    logger.info("Created product %s (%s)", product.product_id, product.name)
    return product


def update_product(
    db: DbClient,
    product_id: str,
    fields: ProductFields,
    *,
    image_url: Optional[str] = None,
    additional_images: Optional[list[str]] = None,
) -> ProductRecord:
    existing = get_product_or_404(db, product_id)
    changes = fields.model_dump(exclude_none=True)
    if image_url:
        changes["image_url"] = image_url
    product = replace(existing, **changes)
    db.save_product(product)

    if additional_images:
        db.delete_product_images(product_id)
        db.add_product_images(
            [ProductImageRecord(product_id=product_id, image_url=url) for url in additional_images]
        )
    return product


def delete_product(db: DbClient, product_id: str) -> None:
    get_product_or_404(db, product_id)
    db.delete_product_images(product_id)
    db.delete_product(product_id)
    logger.info("Deleted product %s", product_id)


def list_reviews(db: DbClient, product_id: str, page: int, limit: int) -> dict:
    page = max(page, 1)
    limit = max(limit, 1)
    start, _ = page_bounds(page, limit)
    reviews = db.list_reviews(product_id, offset=start, limit=limit)
    if not reviews:
        raise NotFoundError("No reviews found for this product.")

    authors: dict[str, Optional[dict]] = {}
    payload = []
    for review in reviews:
        if review.user_id not in authors:
            user = db.get_user(review.user_id)
            authors[review.user_id] = (
                {
                    "id": user.user_id,
                    "username": user.username,
                    "f_name": user.f_name,
                    "l_name": user.l_name,
                }
                if user
                else None
            )
        item = review.as_dict()
        item["user"] = authors[review.user_id]
        payload.append(item)
    return {"page": page, "limit": limit, "count": len(payload), "reviews": payload}


def add_review(
    db: DbClient, product_id: str, user_id: str, rating: int, comment_text: Optional[str]
) -> ReviewRecord:
    get_product_or_404(db, product_id)
    return db.add_review(
        ReviewRecord(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            comment_text=comment_text,
        )
    )
