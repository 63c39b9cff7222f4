"""
Cart, checkout and order completion.

Each flow is a sequence of independent database calls. There is no
transaction around them: a failure part way through aborts the request and
leaves earlier writes in place.
"""

from __future__ import annotations

import logging
from typing import Optional

from storefront.catalog import get_product_or_404
from storefront.db import (
    CART_CHECKED_OUT,
    ORDER_COMPLETED,
    CartItemRecord,
    CartRecord,
    DbClient,
    OrderItemRecord,
    OrderRecord,
    ProductRecord,
    UserRecord,
)
from storefront.errors import InsufficientStockError, InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

RECENT_ORDERS_LIMIT = 5
TOP_USERS_LIMIT = 5


def get_or_create_cart(db: DbClient, user_id: str) -> CartRecord:
    cart = db.get_pending_cart(user_id)
    if cart:
        return cart
    return db.add_cart(CartRecord(user_id=user_id))


def add_item(db: DbClient, user_id: str, product_id: str, quantity: int = 1) -> int:
    """Add ``quantity`` of a product and return the number of lines in the cart."""
    cart = get_or_create_cart(db, user_id)
    product = get_product_or_404(db, product_id)

    existing = db.get_cart_item(cart.cart_id, product_id)
    if existing:
        db.set_cart_item_quantity(existing.item_id, existing.quantity + quantity)
    else:
        db.add_cart_item(
            CartItemRecord(
                cart_id=cart.cart_id,
                product_id=product_id,
                quantity=quantity,
                price=product.unit_price,
            )
        )
    return len(db.list_cart_items(cart.cart_id))


def list_cart(db: DbClient, user_id: str) -> list[dict]:
    cart = get_or_create_cart(db, user_id)
    lines = []
    for item in db.list_cart_items(cart.cart_id):
        product = db.get_product(item.product_id)
        lines.append(
            {
                "id": item.item_id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price": item.price,
                "product": (
                    {
                        "name": product.name,
                        "discounted_price": product.discounted_price,
                        "original_price": product.original_price,
                        "image_url": product.image_url,
                    }
                    if product
                    else None
                ),
            }
        )
    return lines


def cart_count(db: DbClient, user_id: str) -> int:
    cart = db.get_pending_cart(user_id)
    if not cart:
        return 0
    return len(db.list_cart_items(cart.cart_id))


def update_quantity(db: DbClient, user_id: str, product_id: Optional[str], quantity: Optional[int]) -> None:
    if not product_id or not quantity or quantity <= 0:
        raise InvalidRequestError("Invalid product ID or quantity")
    cart = db.get_pending_cart(user_id)
    if not cart:
        raise NotFoundError("Pending cart not found")
    item = db.get_cart_item(cart.cart_id, product_id)
    if not item:
        raise NotFoundError("Product is not in the cart")
    db.set_cart_item_quantity(item.item_id, quantity)


def remove_item(db: DbClient, user_id: str, product_id: str) -> int:
    """Remove a product's line and return the number of lines left."""
    cart = get_or_create_cart(db, user_id)
    db.delete_cart_item(cart.cart_id, product_id)
    return len(db.list_cart_items(cart.cart_id))


def checkout(
    db: DbClient,
    user_id: str,
    *,
    address: Optional[str] = None,
    customer_name: Optional[str] = None,
) -> OrderRecord:
    """Convert the pending cart into a pending order."""
    cart = db.get_pending_cart(user_id)
    if not cart:
        raise NotFoundError("No pending cart found.")

    items = db.list_cart_items(cart.cart_id)
    if not items:
        raise InvalidRequestError("Cart is empty.")

    total_price = sum(item.quantity * item.price for item in items)
    order = db.add_order(
        OrderRecord(
            user_id=user_id,
            total_price=total_price,
            address=address,
            customer_name=customer_name,
        )
    )
    db.add_order_items(
        [
            OrderItemRecord(
                order_id=order.order_id,
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price,
            )
            for item in items
        ]
    )
    db.clear_cart(cart.cart_id)
    db.set_cart_status(cart.cart_id, CART_CHECKED_OUT)
    logger.info("Checked out cart %s into order %s (%.2f)", cart.cart_id, order.order_id, total_price)
    return order


def _order_lines(db: DbClient, order_id: str, *, with_price: bool) -> list[dict]:
    names: dict[str, Optional[str]] = {}
    lines = []
    for item in db.list_order_items(order_id):
        if item.product_id not in names:
            product = db.get_product(item.product_id)
            names[item.product_id] = product.name if product else None
        line = {
            "product_id": item.product_id,
            "quantity": item.quantity,
            "product": {"name": names[item.product_id]},
        }
        if with_price:
            line["price"] = item.price
        lines.append(line)
    return lines


def _user_summary(user: Optional[UserRecord]) -> Optional[dict]:
    if not user:
        return None
    return {"id": user.user_id, "f_name": user.f_name, "l_name": user.l_name, "email": user.email}


def list_user_orders(db: DbClient, user_id: str) -> list[dict]:
    orders = []
    for order in db.list_orders(user_id=user_id):
        payload = order.as_dict()
        payload["order_items"] = _order_lines(db, order.order_id, with_price=False)
        orders.append(payload)
    return orders


def order_detail(db: DbClient, order: OrderRecord) -> dict:
    payload = order.as_dict()
    payload["user"] = _user_summary(db.get_user(order.user_id))
    payload["order_items"] = _order_lines(db, order.order_id, with_price=True)
    return payload


def list_all_orders(db: DbClient) -> list[dict]:
    return [order_detail(db, order) for order in db.list_orders()]


def get_order_or_404(db: DbClient, order_id: str) -> OrderRecord:
    order = db.get_order(order_id)
    if not order:
        raise NotFoundError("Order not found.")
    return order


def complete_order(db: DbClient, order_id: str) -> None:
    """
    Mark an order ``Completed`` and take its quantities out of stock.

    All stock levels are checked before any is written, so an order that
    cannot be filled leaves every product untouched.
    """
    order = get_order_or_404(db, order_id)
    if order.status == ORDER_COMPLETED:
        raise InvalidRequestError("Order is already completed.")

    items = db.list_order_items(order_id)
    needed: dict[str, int] = {}
    for item in items:
        needed[item.product_id] = needed.get(item.product_id, 0) + item.quantity

    products: dict[str, ProductRecord] = {}
    for product_id, quantity in needed.items():
        product = db.get_product(product_id)
        if not product:
            raise NotFoundError(f"Failed to fetch stock for product {product_id}")
        if product.stock - quantity < 0:
            logger.warning(
                "Order %s needs %d of product %s, only %d in stock",
                order_id,
                quantity,
                product_id,
                product.stock,
            )
            raise InsufficientStockError(product_id, product.stock, quantity)
        products[product_id] = product

    for product_id, quantity in needed.items():
        db.set_product_stock(product_id, products[product_id].stock - quantity)

    db.set_order_status(order_id, ORDER_COMPLETED)
    logger.info("Order %s marked as complete", order_id)


def admin_metrics(db: DbClient) -> dict:
    completed = db.list_orders(status=ORDER_COMPLETED)
    total_income = sum(order.total_price for order in completed)

    recent_orders = []
    for order in db.list_orders(limit=RECENT_ORDERS_LIMIT):
        payload = order.as_dict()
        user = db.get_user(order.user_id)
        payload["user"] = {"f_name": user.f_name, "l_name": user.l_name} if user else None
        recent_orders.append(payload)

    spend: dict[str, float] = {}
    for order in completed:
        spend[order.user_id] = spend.get(order.user_id, 0.0) + order.total_price
    users = db.list_users()
    # Stable sort keeps creation order among equal spenders.
    ranked = sorted(users, key=lambda u: spend.get(u.user_id, 0.0), reverse=True)
    top_users = []
    for user in ranked[:TOP_USERS_LIMIT]:
        summary = _user_summary(user)
        summary["total_spent"] = spend.get(user.user_id, 0.0)
        top_users.append(summary)

    return {
        "totalIncome": total_income,
        "recentOrders": recent_orders,
        "topUsers": top_users,
    }
