# app/routers/orders.py
import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import SellerContext, require_complete_profile
from app.database import get_session
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.order import (
    OrderRead,
    OrderStatus,
    OrderStatusUpdate,
    OrderWithItemsRead,
)
from app.services.analytics_service import AnalyticsService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, AnalyticsService(order_repo, product_repo))


@router.get("", response_model=list[OrderRead])
def list_orders(
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
    status: OrderStatus | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
):
    """
    List the seller's orders, newest first.

    Query params (optional):
      - status: active | completed | cancelled
    """
    return service.list_orders(
        session, context.seller_id, status_filter=status, skip=skip, limit=limit
    )


@router.get("/range", response_model=list[OrderRead])
def list_orders_in_range(
    start_date: date,
    end_date: date,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
    status: OrderStatus | None = None,
):
    """
    Orders created between start_date and end_date (both inclusive,
    store-local calendar days), newest first.
    """
    return service.list_orders_in_range(
        session, context.seller_id, start_date, end_date, status_filter=status
    )


@router.get("/{order_id}", response_model=OrderWithItemsRead)
def get_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Get a single order with its line items.
    """
    return service.get_order(session, context.seller_id, order_id)


@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Update order status with simple state machine.

      active    -> completed, cancelled

      completed -> (no change)

      cancelled -> (no change)

    """
    return service.update_status(session, context.seller_id, order_id, payload)
