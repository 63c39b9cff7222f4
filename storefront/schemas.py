"""
Pydantic schemas for the storefront API.

Field names follow the JSON the frontend already sends and reads, hence the
mix of camelCase (``productId``) and snake_case (``comment_text``).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    message: str
    isAdmin: bool
    username: str


class SignupRequest(BaseModel):
    f_name: Optional[str] = None
    l_name: Optional[str] = None
    username: Optional[str] = None
    address: Optional[str] = None
    number: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    id: str
    username: str
    role: str


class SignupResponse(BaseModel):
    message: str
    user: PublicUser


class SessionResponse(BaseModel):
    loggedIn: bool
    userId: Optional[str] = None


class CartAddRequest(BaseModel):
    productId: Optional[str] = None
    quantity: int = Field(default=1, ge=1)


class CartUpdateRequest(BaseModel):
    productId: Optional[str] = None
    quantity: Optional[int] = None


class CartRemoveRequest(BaseModel):
    productId: str


class CartAddResponse(BaseModel):
    cartCount: int


class CartRemoveResponse(BaseModel):
    message: str
    cartCount: int


class CartCountResponse(BaseModel):
    count: int


class CartProduct(BaseModel):
    name: Optional[str] = None
    discounted_price: Optional[float] = None
    original_price: Optional[float] = None
    image_url: Optional[str] = None


class CartLine(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float
    product: Optional[CartProduct] = None


class CheckoutRequest(BaseModel):
    address: Optional[str] = Field(default=None, max_length=512)
    customer_name: Optional[str] = Field(default=None, max_length=256)


class CheckoutResponse(BaseModel):
    message: str
    orderId: str


class Product(BaseModel):
    id: str
    name: str
    original_price: float
    discounted_price: Optional[float] = None
    category: Optional[str] = None
    stock: int
    image_url: Optional[str] = None
    description: Optional[str] = None
    created_at: float


class ProductDetail(Product):
    images: list[str] = []


class PageRef(BaseModel):
    page: int
    limit: int


class ProductPage(BaseModel):
    results: list[Product]
    next: Optional[PageRef] = None
    previous: Optional[PageRef] = None


class ProductFields(BaseModel):
    """Editable product columns; ``None`` means "leave unchanged" on update."""

    name: Optional[str] = None
    original_price: Optional[float] = Field(default=None, ge=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None


class ProductSaved(BaseModel):
    message: str
    product: ProductDetail


class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment_text: Optional[str] = Field(default=None, max_length=2000)


class ReviewAuthor(BaseModel):
    id: str
    username: str
    f_name: str
    l_name: str


class Review(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    comment_text: Optional[str] = None
    created_at: float
    user: Optional[ReviewAuthor] = None


class ReviewPage(BaseModel):
    page: int
    limit: int
    count: int
    reviews: list[Review]


class ReviewCreated(BaseModel):
    message: str
    review: Review


class Plan(BaseModel):
    id: str
    plan_name: str
    price: float
    duration: str
    description: Optional[str] = None


class PlanCheckoutRequest(BaseModel):
    planId: str


class PlanCheckoutResponse(BaseModel):
    message: str
    start_date: str
    expiry_date: str


class DbStatusResponse(BaseModel):
    ok: bool
    error: Optional[str] = None
