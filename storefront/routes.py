"""
HTTP routes for the storefront JSON API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront import accounts, catalog, membership, orders
from storefront.auth import (
    SessionData,
    end_session,
    get_current_session,
    require_admin,
    require_user,
    start_session,
)
from storefront.config import get_settings
from storefront.db import DbClient, ProductFilter
from storefront.dependencies import get_db_client, get_image_storage, get_session_store
from storefront.schemas import (
    CartAddRequest,
    CartAddResponse,
    CartCountResponse,
    CartLine,
    CartRemoveRequest,
    CartRemoveResponse,
    CartUpdateRequest,
    CheckoutRequest,
    CheckoutResponse,
    DbStatusResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Plan,
    PlanCheckoutRequest,
    PlanCheckoutResponse,
    ProductDetail,
    ProductFields,
    ProductPage,
    ProductSaved,
    ReviewCreated,
    ReviewPage,
    ReviewRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
)
from storefront.sessions import SessionStore
from storefront.storage import ImageStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/_debug/db", response_model=DbStatusResponse)
def debug_db(db: DbClient = Depends(get_db_client)):
    """Confirm the database answers a trivial query."""
    try:
        db.healthcheck()
    except SQLAlchemyError as exc:
        logger.exception("Database healthcheck failed")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})
    return DbStatusResponse(ok=True)


# Auth


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: DbClient = Depends(get_db_client),
    store: SessionStore = Depends(get_session_store),
):
    user = accounts.authenticate(db, payload.email, payload.password)
    start_session(response, store, SessionData.for_user(user))
    return LoginResponse(message="Login successful", isAdmin=user.is_admin, username=user.username)


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(
    payload: SignupRequest,
    response: Response,
    db: DbClient = Depends(get_db_client),
    store: SessionStore = Depends(get_session_store),
):
    user = accounts.signup(db, payload)
    start_session(response, store, SessionData.for_user(user))
    return SignupResponse(
        message="ok",
        user={"id": user.user_id, "username": user.username, "role": user.role},
    )


@router.get("/session", response_model=SessionResponse)
def session_status(session: Optional[SessionData] = Depends(get_current_session)):
    if session is None:
        return SessionResponse(loggedIn=False, userId=None)
    return SessionResponse(loggedIn=True, userId=session.user_id)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    end_session(request, response, store)
    return MessageResponse(message="Logged out successfully")


@router.get("/orders")
def list_my_orders(
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    return orders.list_user_orders(db, session.user_id)


# Cart


@router.post("/cart/add", response_model=CartAddResponse, status_code=201)
def add_to_cart(
    payload: CartAddRequest,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    if not payload.productId:
        raise HTTPException(status_code=400, detail="Product ID is required")
    count = orders.add_item(db, session.user_id, payload.productId, payload.quantity)
    return CartAddResponse(cartCount=count)


@router.get("/cart", response_model=list[CartLine])
def get_cart(
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    return orders.list_cart(db, session.user_id)


@router.get("/cart/count", response_model=CartCountResponse)
def get_cart_count(
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    return CartCountResponse(count=orders.cart_count(db, session.user_id))


@router.post("/cart/update", response_model=MessageResponse)
def update_cart_quantity(
    payload: CartUpdateRequest,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    orders.update_quantity(db, session.user_id, payload.productId, payload.quantity)
    return MessageResponse(message="Cart quantity updated successfully")


@router.post("/cart/remove", response_model=CartRemoveResponse)
def remove_from_cart(
    payload: CartRemoveRequest,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    count = orders.remove_item(db, session.user_id, payload.productId)
    return CartRemoveResponse(message="Item removed successfully", cartCount=count)


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    payload: Optional[CheckoutRequest] = None,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    payload = payload or CheckoutRequest()
    order = orders.checkout(
        db,
        session.user_id,
        address=payload.address,
        customer_name=payload.customer_name,
    )
    return CheckoutResponse(message="Checkout successful", orderId=order.order_id)


# Products


def product_form(
    name: Optional[str] = Form(None),
    original_price: Optional[float] = Form(None, ge=0),
    discounted_price: Optional[float] = Form(None, ge=0),
    category: Optional[str] = Form(None),
    stock: Optional[int] = Form(None, ge=0),
    description: Optional[str] = Form(None),
) -> ProductFields:
    return ProductFields(
        name=name,
        original_price=original_price,
        discounted_price=discounted_price,
        category=category,
        stock=stock,
        description=description,
    )


async def _main_image_url(
    image_file: Optional[UploadFile], image_url: Optional[str], storage: ImageStorage
) -> Optional[str]:
    if image_file is not None and image_file.filename:
        max_bytes = get_settings().max_upload_bytes
        # One byte past the limit is enough to reject an oversized upload.
        data = await image_file.read(max_bytes + 1)
        return catalog.store_image(
            storage,
            data,
            filename=image_file.filename,
            content_type=image_file.content_type,
            max_bytes=max_bytes,
        )
    return image_url or None


@router.get("/products", response_model=ProductPage)
def list_products(
    page: int = Query(1),
    limit: int = Query(catalog.DEFAULT_PAGE_SIZE),
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    price: Optional[float] = Query(None),
    availability: Optional[str] = Query(None),
    db: DbClient = Depends(get_db_client),
):
    product_filter = ProductFilter(
        search=search, category=category, max_price=price, availability=availability
    )
    return catalog.list_products(db, product_filter, page, limit)


@router.get("/products/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, db: DbClient = Depends(get_db_client)):
    product = catalog.get_product_or_404(db, product_id)
    return catalog.product_detail(db, product)


@router.post("/products", response_model=ProductSaved, status_code=201)
async def create_product(
    fields: ProductFields = Depends(product_form),
    image_url: Optional[str] = Form(None),
    additional_images: Optional[str] = Form(None),
    image_file: Optional[UploadFile] = File(None),
    _admin: SessionData = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    storage: ImageStorage = Depends(get_image_storage),
):
    main_image = await _main_image_url(image_file, image_url, storage)
    product = catalog.create_product(
        db,
        fields,
        image_url=main_image,
        additional_images=catalog.normalize_extra_images(additional_images),
    )
    return ProductSaved(
        message="Product added successfully",
        product=catalog.product_detail(db, product),
    )


@router.put("/products/{product_id}", response_model=ProductSaved)
async def update_product(
    product_id: str,
    fields: ProductFields = Depends(product_form),
    image_url: Optional[str] = Form(None),
    additional_images: Optional[str] = Form(None),
    image_file: Optional[UploadFile] = File(None),
    _admin: SessionData = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    storage: ImageStorage = Depends(get_image_storage),
):
    main_image = await _main_image_url(image_file, image_url, storage)
    product = catalog.update_product(
        db,
        product_id,
        fields,
        image_url=main_image,
        additional_images=catalog.normalize_extra_images(additional_images),
    )
    return ProductSaved(
        message="Product updated successfully",
        product=catalog.product_detail(db, product),
    )


@router.delete("/products/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    _admin: SessionData = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    catalog.delete_product(db, product_id)
    return MessageResponse(message="Product deleted successfully")


# Reviews


@router.get("/products/{product_id}/reviews", response_model=ReviewPage)
def list_reviews(
    product_id: str,
    page: int = Query(1),
    limit: int = Query(catalog.DEFAULT_PAGE_SIZE),
    _session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    return catalog.list_reviews(db, product_id, page, limit)


@router.post("/products/{product_id}/reviews", response_model=ReviewCreated, status_code=201)
def add_review(
    product_id: str,
    payload: ReviewRequest,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    review = catalog.add_review(db, product_id, session.user_id, payload.rating, payload.comment_text)
    return ReviewCreated(message="Review added successfully", review=review.as_dict())


# Membership


@router.get("/plans", response_model=list[Plan])
def list_plans(db: DbClient = Depends(get_db_client)):
    return membership.list_plans(db)


@router.get("/plans/{plan_id}", response_model=Plan)
def get_plan(plan_id: str, db: DbClient = Depends(get_db_client)):
    return membership.get_plan_or_404(db, plan_id).as_dict()


@router.post("/plans/checkout", response_model=PlanCheckoutResponse, status_code=201)
def checkout_plan(
    payload: PlanCheckoutRequest,
    session: SessionData = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    member = membership.checkout_plan(db, session.user_id, payload.planId)
    return PlanCheckoutResponse(
        message="Membership successfully activated.",
        start_date=member.start_date,
        expiry_date=member.expiry_date,
    )
