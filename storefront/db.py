"""
Database abstraction for Postgres and an in-memory test implementation.

Every method is a single-table primitive. Multi-step flows such as checkout
live in the service modules and call these one after the other.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field, fields
from typing import Dict, List, Optional, Protocol

from sqlalchemy import Column, Float, Integer, String, Text, create_engine, delete, select, text, update
from sqlalchemy.orm import Session, declarative_base, sessionmaker

CART_PENDING = "pending"
CART_CHECKED_OUT = "checked_out"
ORDER_PENDING = "pending"
ORDER_COMPLETED = "Completed"


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> float:
    return time.time()


@dataclass
class UserRecord:
    f_name: str
    l_name: str
    username: str
    address: str
    number: str
    email: str
    password_hash: str
    role: str = "user"
    user_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def as_dict(self) -> dict:
        return {
            "id": self.user_id,
            "f_name": self.f_name,
            "l_name": self.l_name,
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }


@dataclass
class ProductRecord:
    name: str
    original_price: float
    discounted_price: Optional[float] = None
    category: Optional[str] = None
    stock: int = 0
    image_url: Optional[str] = None
    description: Optional[str] = None
    product_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)

    @property
    def unit_price(self) -> float:
        return self.discounted_price or self.original_price

    def as_dict(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "original_price": self.original_price,
            "discounted_price": self.discounted_price,
            "category": self.category,
            "stock": self.stock,
            "image_url": self.image_url,
            "description": self.description,
            "created_at": self.created_at,
        }


@dataclass
class ProductImageRecord:
    product_id: str
    image_url: str
    image_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)


@dataclass
class CartRecord:
    user_id: str
    status: str = CART_PENDING
    cart_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)


@dataclass
class CartItemRecord:
    cart_id: str
    product_id: str
    quantity: int
    price: float
    item_id: str = field(default_factory=_new_id)


@dataclass
class OrderRecord:
    user_id: str
    total_price: float
    status: str = ORDER_PENDING
    address: Optional[str] = None
    customer_name: Optional[str] = None
    order_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)

    def as_dict(self) -> dict:
        return {
            "id": self.order_id,
            "total_price": self.total_price,
            "status": self.status,
            "address": self.address,
            "customer_name": self.customer_name,
            "created_at": self.created_at,
        }


@dataclass
class OrderItemRecord:
    order_id: str
    product_id: str
    quantity: int
    price: float
    item_id: str = field(default_factory=_new_id)


@dataclass
class PlanRecord:
    plan_name: str
    price: float
    duration: str
    description: Optional[str] = None
    plan_id: str = field(default_factory=_new_id)

    def as_dict(self) -> dict:
        return {
            "id": self.plan_id,
            "plan_name": self.plan_name,
            "price": self.price,
            "duration": self.duration,
            "description": self.description,
        }


@dataclass
class MemberRecord:
    user_id: str
    plan_id: str
    start_date: str
    expiry_date: str
    member_id: str = field(default_factory=_new_id)


@dataclass
class ReviewRecord:
    product_id: str
    user_id: str
    rating: int
    comment_text: Optional[str] = None
    review_id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=_now)

    def as_dict(self) -> dict:
        return {
            "id": self.review_id,
            "product_id": self.product_id,
            "user_id": self.user_id,
            "rating": self.rating,
            "comment_text": self.comment_text,
            "created_at": self.created_at,
        }


@dataclass
class ProductFilter:
    search: Optional[str] = None
    category: Optional[str] = None
    max_price: Optional[float] = None
    availability: Optional[str] = None

    def matches(self, product: ProductRecord) -> bool:
        if self.search and self.search.lower() not in product.name.lower():
            return False
        if self.category and self.category != "all" and product.category != self.category:
            return False
        if self.max_price is not None:
            if product.discounted_price is None or product.discounted_price > self.max_price:
                return False
        if self.availability:
            in_stock = product.stock > 0
            if in_stock != (self.availability == "in-stock"):
                return False
        return True


class DbClient(Protocol):
    """Interface for database access."""

    def healthcheck(self) -> bool:
        ...

    def add_user(self, user: UserRecord) -> UserRecord:
        ...

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def list_users(self, limit: Optional[int] = None) -> List[UserRecord]:
        ...

    def set_user_role(self, user_id: str, role: str) -> None:
        ...

    def add_product(self, product: ProductRecord) -> ProductRecord:
        ...

    def save_product(self, product: ProductRecord) -> None:
        ...

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        ...

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[ProductRecord]:
        ...

    def delete_product(self, product_id: str) -> bool:
        ...

    def set_product_stock(self, product_id: str, stock: int) -> None:
        ...

    def add_product_images(self, images: List[ProductImageRecord]) -> None:
        ...

    def list_product_images(self, product_id: str) -> List[ProductImageRecord]:
        ...

    def delete_product_images(self, product_id: str) -> None:
        ...

    def get_pending_cart(self, user_id: str) -> Optional[CartRecord]:
        ...

    def add_cart(self, cart: CartRecord) -> CartRecord:
        ...

    def set_cart_status(self, cart_id: str, status: str) -> None:
        ...

    def get_cart_item(self, cart_id: str, product_id: str) -> Optional[CartItemRecord]:
        ...

    def list_cart_items(self, cart_id: str) -> List[CartItemRecord]:
        ...

    def add_cart_item(self, item: CartItemRecord) -> CartItemRecord:
        ...

    def set_cart_item_quantity(self, item_id: str, quantity: int) -> None:
        ...

    def delete_cart_item(self, cart_id: str, product_id: str) -> bool:
        ...

    def clear_cart(self, cart_id: str) -> None:
        ...

    def add_order(self, order: OrderRecord) -> OrderRecord:
        ...

    def add_order_items(self, items: List[OrderItemRecord]) -> None:
        ...

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        ...

    def list_orders(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[OrderRecord]:
        ...

    def list_order_items(self, order_id: str) -> List[OrderItemRecord]:
        ...

    def set_order_status(self, order_id: str, status: str) -> None:
        ...

    def add_plan(self, plan: PlanRecord) -> PlanRecord:
        ...

    def get_plan(self, plan_id: str) -> Optional[PlanRecord]:
        ...

    def list_plans(self) -> List[PlanRecord]:
        ...

    def add_member(self, member: MemberRecord) -> MemberRecord:
        ...

    def list_members(self) -> List[MemberRecord]:
        ...

    def add_review(self, review: ReviewRecord) -> ReviewRecord:
        ...

    def list_reviews(self, product_id: str, *, offset: int = 0, limit: int = 10) -> List[ReviewRecord]:
        ...


def _newest_first(records: list, key: str) -> list:
    # Reverse first so rows created within the same clock tick keep newest-first order.
    return sorted(reversed(records), key=lambda r: getattr(r, key), reverse=True)


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.products: Dict[str, ProductRecord] = {}
        self.product_images: Dict[str, ProductImageRecord] = {}
        self.carts: Dict[str, CartRecord] = {}
        self.cart_items: Dict[str, CartItemRecord] = {}
        self.orders: Dict[str, OrderRecord] = {}
        self.order_items: Dict[str, OrderItemRecord] = {}
        self.plans: Dict[str, PlanRecord] = {}
        self.members: Dict[str, MemberRecord] = {}
        self.reviews: Dict[str, ReviewRecord] = {}

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        for table in (
            self.users,
            self.products,
            self.product_images,
            self.carts,
            self.cart_items,
            self.orders,
            self.order_items,
            self.plans,
            self.members,
            self.reviews,
        ):
            table.clear()

    def healthcheck(self) -> bool:
        return True

    # Users

    def add_user(self, user: UserRecord) -> UserRecord:
        self.users[user.user_id] = user
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def list_users(self, limit: Optional[int] = None) -> List[UserRecord]:
        users = list(self.users.values())
        return users[:limit] if limit is not None else users

    def set_user_role(self, user_id: str, role: str) -> None:
        user = self.users.get(user_id)
        if user:
            user.role = role

    # Products

    def add_product(self, product: ProductRecord) -> ProductRecord:
        self.products[product.product_id] = product
        return product

    def save_product(self, product: ProductRecord) -> None:
        if product.product_id in self.products:
            self.products[product.product_id] = product

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        return self.products.get(product_id)

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[ProductRecord]:
        product_filter = product_filter or ProductFilter()
        return [p for p in self.products.values() if product_filter.matches(p)]

    def delete_product(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None

    def set_product_stock(self, product_id: str, stock: int) -> None:
        product = self.products.get(product_id)
        if product:
            product.stock = stock

    def add_product_images(self, images: List[ProductImageRecord]) -> None:
        for image in images:
            self.product_images[image.image_id] = image

    def list_product_images(self, product_id: str) -> List[ProductImageRecord]:
        return [i for i in self.product_images.values() if i.product_id == product_id]

    def delete_product_images(self, product_id: str) -> None:
        for image in self.list_product_images(product_id):
            del self.product_images[image.image_id]

    # Carts

    def get_pending_cart(self, user_id: str) -> Optional[CartRecord]:
        for cart in self.carts.values():
            if cart.user_id == user_id and cart.status == CART_PENDING:
                return cart
        return None

    def add_cart(self, cart: CartRecord) -> CartRecord:
        self.carts[cart.cart_id] = cart
        return cart

    def set_cart_status(self, cart_id: str, status: str) -> None:
        cart = self.carts.get(cart_id)
        if cart:
            cart.status = status

    def get_cart_item(self, cart_id: str, product_id: str) -> Optional[CartItemRecord]:
        for item in self.cart_items.values():
            if item.cart_id == cart_id and item.product_id == product_id:
                return item
        return None

    def list_cart_items(self, cart_id: str) -> List[CartItemRecord]:
        return [i for i in self.cart_items.values() if i.cart_id == cart_id]

    def add_cart_item(self, item: CartItemRecord) -> CartItemRecord:
        self.cart_items[item.item_id] = item
        return item

    def set_cart_item_quantity(self, item_id: str, quantity: int) -> None:
        item = self.cart_items.get(item_id)
        if item:
            item.quantity = quantity

    def delete_cart_item(self, cart_id: str, product_id: str) -> bool:
        item = self.get_cart_item(cart_id, product_id)
        if not item:
            return False
        del self.cart_items[item.item_id]
        return True

    def clear_cart(self, cart_id: str) -> None:
        for item in self.list_cart_items(cart_id):
            del self.cart_items[item.item_id]

    # Orders

    def add_order(self, order: OrderRecord) -> OrderRecord:
        self.orders[order.order_id] = order
        return order

    def add_order_items(self, items: List[OrderItemRecord]) -> None:
        for item in items:
            self.order_items[item.item_id] = item

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        return self.orders.get(order_id)

    def list_orders(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[OrderRecord]:
        orders = [
            o
            for o in self.orders.values()
            if (user_id is None or o.user_id == user_id)
            and (status is None or o.status == status)
        ]
        orders = _newest_first(orders, "created_at")
        return orders[:limit] if limit is not None else orders

    def list_order_items(self, order_id: str) -> List[OrderItemRecord]:
        return [i for i in self.order_items.values() if i.order_id == order_id]

    def set_order_status(self, order_id: str, status: str) -> None:
        order = self.orders.get(order_id)
        if order:
            order.status = status

    # Membership

    def add_plan(self, plan: PlanRecord) -> PlanRecord:
        self.plans[plan.plan_id] = plan
        return plan

    def get_plan(self, plan_id: str) -> Optional[PlanRecord]:
        return self.plans.get(plan_id)

    def list_plans(self) -> List[PlanRecord]:
        return list(self.plans.values())

    def add_member(self, member: MemberRecord) -> MemberRecord:
        self.members[member.member_id] = member
        return member

    def list_members(self) -> List[MemberRecord]:
        return list(self.members.values())

    # Reviews

    def add_review(self, review: ReviewRecord) -> ReviewRecord:
        self.reviews[review.review_id] = review
        return review

    def list_reviews(self, product_id: str, *, offset: int = 0, limit: int = 10) -> List[ReviewRecord]:
        reviews = [r for r in self.reviews.values() if r.product_id == product_id]
        return _newest_first(reviews, "created_at")[offset : offset + limit]


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _add(self, row) -> None:
        with self.Session() as session:
            session.add(row)
            session.commit()

    def _get(self, row_cls, record_cls, key: str):
        with self.Session() as session:
            row = session.get(row_cls, key)
            return _to_record(row, record_cls) if row else None

    def _all(self, stmt, record_cls) -> list:
        with self.Session() as session:
            return [_to_record(row, record_cls) for row in session.execute(stmt).scalars()]

    def _first(self, stmt, record_cls):
        with self.Session() as session:
            row = session.execute(stmt.limit(1)).scalars().first()
            return _to_record(row, record_cls) if row else None

    def _execute(self, stmt) -> int:
        with self.Session() as session:
            result = session.execute(stmt)
            session.commit()
            return result.rowcount or 0

    def healthcheck(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    # Users

    def add_user(self, user: UserRecord) -> UserRecord:
        self._add(_to_row(user, UserRow))
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._get(UserRow, UserRecord, user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._first(select(UserRow).where(UserRow.email == email), UserRecord)

    def list_users(self, limit: Optional[int] = None) -> List[UserRecord]:
        stmt = select(UserRow).order_by(UserRow.created_at.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt, UserRecord)

    def set_user_role(self, user_id: str, role: str) -> None:
        self._execute(update(UserRow).where(UserRow.user_id == user_id).values(role=role))

    # Products

    def add_product(self, product: ProductRecord) -> ProductRecord:
        self._add(_to_row(product, ProductRow))
        return product

    def save_product(self, product: ProductRecord) -> None:
        with self.Session() as session:
            row = session.get(ProductRow, product.product_id)
            if not row:
                return
            for name, value in asdict(product).items():
                setattr(row, name, value)
            session.commit()

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        return self._get(ProductRow, ProductRecord, product_id)

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[ProductRecord]:
        f = product_filter or ProductFilter()
        stmt = select(ProductRow)
        if f.search:
            stmt = stmt.where(ProductRow.name.ilike(f"%{f.search}%"))
        if f.category and f.category != "all":
            stmt = stmt.where(ProductRow.category == f.category)
        if f.max_price is not None:
            stmt = stmt.where(ProductRow.discounted_price <= f.max_price)
        if f.availability:
            if f.availability == "in-stock":
                stmt = stmt.where(ProductRow.stock > 0)
            else:
                stmt = stmt.where(ProductRow.stock == 0)
        return self._all(stmt.order_by(ProductRow.created_at.asc()), ProductRecord)

    def delete_product(self, product_id: str) -> bool:
        return self._execute(delete(ProductRow).where(ProductRow.product_id == product_id)) > 0

    def set_product_stock(self, product_id: str, stock: int) -> None:
        self._execute(
            update(ProductRow).where(ProductRow.product_id == product_id).values(stock=stock)
        )

    def add_product_images(self, images: List[ProductImageRecord]) -> None:
        with self.Session() as session:
            session.add_all([_to_row(image, ProductImageRow) for image in images])
            session.commit()

    def list_product_images(self, product_id: str) -> List[ProductImageRecord]:
        stmt = (
            select(ProductImageRow)
            .where(ProductImageRow.product_id == product_id)
            .order_by(ProductImageRow.created_at.asc())
        )
        return self._all(stmt, ProductImageRecord)

    def delete_product_images(self, product_id: str) -> None:
        self._execute(delete(ProductImageRow).where(ProductImageRow.product_id == product_id))

    # Carts

    def get_pending_cart(self, user_id: str) -> Optional[CartRecord]:
        stmt = (
            select(CartRow)
            .where(CartRow.user_id == user_id, CartRow.status == CART_PENDING)
            .order_by(CartRow.created_at.asc())
        )
        return self._first(stmt, CartRecord)

    def add_cart(self, cart: CartRecord) -> CartRecord:
        self._add(_to_row(cart, CartRow))
        return cart

    def set_cart_status(self, cart_id: str, status: str) -> None:
        self._execute(update(CartRow).where(CartRow.cart_id == cart_id).values(status=status))

    def get_cart_item(self, cart_id: str, product_id: str) -> Optional[CartItemRecord]:
        stmt = select(CartItemRow).where(
            CartItemRow.cart_id == cart_id, CartItemRow.product_id == product_id
        )
        return self._first(stmt, CartItemRecord)

    def list_cart_items(self, cart_id: str) -> List[CartItemRecord]:
        return self._all(select(CartItemRow).where(CartItemRow.cart_id == cart_id), CartItemRecord)

    def add_cart_item(self, item: CartItemRecord) -> CartItemRecord:
        self._add(_to_row(item, CartItemRow))
        return item

    def set_cart_item_quantity(self, item_id: str, quantity: int) -> None:
        self._execute(
            update(CartItemRow).where(CartItemRow.item_id == item_id).values(quantity=quantity)
        )

    def delete_cart_item(self, cart_id: str, product_id: str) -> bool:
        stmt = delete(CartItemRow).where(
            CartItemRow.cart_id == cart_id, CartItemRow.product_id == product_id
        )
        return self._execute(stmt) > 0

    def clear_cart(self, cart_id: str) -> None:
        self._execute(delete(CartItemRow).where(CartItemRow.cart_id == cart_id))

    # Orders

    def add_order(self, order: OrderRecord) -> OrderRecord:
        self._add(_to_row(order, OrderRow))
        return order

    def add_order_items(self, items: List[OrderItemRecord]) -> None:
        with self.Session() as session:
            session.add_all([_to_row(item, OrderItemRow) for item in items])
            session.commit()

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        return self._get(OrderRow, OrderRecord, order_id)

    def list_orders(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[OrderRecord]:
        stmt = select(OrderRow)
        if user_id is not None:
            stmt = stmt.where(OrderRow.user_id == user_id)
        if status is not None:
            stmt = stmt.where(OrderRow.status == status)
        stmt = stmt.order_by(OrderRow.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt, OrderRecord)

    def list_order_items(self, order_id: str) -> List[OrderItemRecord]:
        return self._all(
            select(OrderItemRow).where(OrderItemRow.order_id == order_id), OrderItemRecord
        )

    def set_order_status(self, order_id: str, status: str) -> None:
        self._execute(update(OrderRow).where(OrderRow.order_id == order_id).values(status=status))

    # Membership

    def add_plan(self, plan: PlanRecord) -> PlanRecord:
        self._add(_to_row(plan, PlanRow))
        return plan

    def get_plan(self, plan_id: str) -> Optional[PlanRecord]:
        return self._get(PlanRow, PlanRecord, plan_id)

    def list_plans(self) -> List[PlanRecord]:
        return self._all(select(PlanRow).order_by(PlanRow.price.asc()), PlanRecord)

    def add_member(self, member: MemberRecord) -> MemberRecord:
        self._add(_to_row(member, MemberRow))
        return member

    def list_members(self) -> List[MemberRecord]:
        return self._all(select(MemberRow).order_by(MemberRow.start_date.asc()), MemberRecord)

    # Reviews

    def add_review(self, review: ReviewRecord) -> ReviewRecord:
        self._add(_to_row(review, ReviewRow))
        return review

    def list_reviews(self, product_id: str, *, offset: int = 0, limit: int = 10) -> List[ReviewRecord]:
        stmt = (
            select(ReviewRow)
            .where(ReviewRow.product_id == product_id)
            .order_by(ReviewRow.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return self._all(stmt, ReviewRecord)


def _to_row(record, row_cls):
    return row_cls(**asdict(record))


def _to_record(row, record_cls):
    return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    user_id = Column("id", String, primary_key=True)
    f_name = Column(String, nullable=False)
    l_name = Column(String, nullable=False)
    username = Column(String, nullable=False)
    address = Column(String, nullable=False)
    number = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column("password", String, nullable=False)
    role = Column(String, nullable=False, default="user")
    created_at = Column(Float, nullable=False)


class ProductRow(Base):
    __tablename__ = "products"

    product_id = Column("id", String, primary_key=True)
    name = Column(String, nullable=False)
    original_price = Column(Float, nullable=False)
    discounted_price = Column(Float, nullable=True)
    category = Column(String, nullable=True, index=True)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(Float, nullable=False)


class ProductImageRow(Base):
    __tablename__ = "product_images"

    image_id = Column("id", String, primary_key=True)
    product_id = Column(String, nullable=False, index=True)
    image_url = Column(String, nullable=False)
    created_at = Column(Float, nullable=False)


class CartRow(Base):
    __tablename__ = "carts"

    cart_id = Column("id", String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(Float, nullable=False)


class CartItemRow(Base):
    __tablename__ = "cart_items"

    item_id = Column("id", String, primary_key=True)
    cart_id = Column(String, nullable=False, index=True)
    product_id = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)


class OrderRow(Base):
    __tablename__ = "orders"

    order_id = Column("id", String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    total_price = Column(Float, nullable=False)
    status = Column(String, nullable=False, index=True)
    address = Column(String, nullable=True)
    customer_name = Column(String, nullable=True)
    created_at = Column(Float, nullable=False)


class OrderItemRow(Base):
    __tablename__ = "order_items"

    item_id = Column("id", String, primary_key=True)
    order_id = Column(String, nullable=False, index=True)
    product_id = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)


class PlanRow(Base):
    __tablename__ = "membership_plans"

    plan_id = Column("id", String, primary_key=True)
    plan_name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    duration = Column(String, nullable=False)
    description = Column(Text, nullable=True)


class MemberRow(Base):
    __tablename__ = "members"

    member_id = Column("id", String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    plan_id = Column(String, nullable=False)
    start_date = Column(String, nullable=False)
    expiry_date = Column(String, nullable=False)


class ReviewRow(Base):
    __tablename__ = "reviews"

    review_id = Column("id", String, primary_key=True)
    product_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    comment_text = Column(Text, nullable=True)
    created_at = Column(Float, nullable=False)
