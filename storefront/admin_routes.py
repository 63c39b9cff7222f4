"""
Back office routes. Every route here requires an admin session.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront import membership, orders
from storefront.auth import require_admin
from storefront.db import DbClient
from storefront.dependencies import get_db_client
from storefront.schemas import MessageResponse

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


@admin_router.get("/orders")
def list_orders(db: DbClient = Depends(get_db_client)):
    return orders.list_all_orders(db)


@admin_router.get("/orders/{order_id}")
def get_order(order_id: str, db: DbClient = Depends(get_db_client)):
    return orders.order_detail(db, orders.get_order_or_404(db, order_id))


@admin_router.post("/orders/{order_id}/complete", response_model=MessageResponse)
def complete_order(order_id: str, db: DbClient = Depends(get_db_client)):
    orders.complete_order(db, order_id)
    return MessageResponse(message="Order marked as complete.")


@admin_router.get("/members")
def list_members(db: DbClient = Depends(get_db_client)):
    return membership.list_members(db)


@admin_router.get("/metrics")
def metrics(db: DbClient = Depends(get_db_client)):
    return orders.admin_metrics(db)
