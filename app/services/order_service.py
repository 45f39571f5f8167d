# app/services/order_service.py
import logging
import uuid
from datetime import date, datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.order import Order, OrderItem
from app.repositories.order_repo import OrderRepository
from app.schemas.order import (
    OrderItemRead,
    OrderStatusUpdate,
    OrderWithItemsRead,
)
from app.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)

# "active" is the only non-terminal state
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "active": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


class OrderService:
    """
    Business logic for a seller's orders.

    Responsibilities:
      - list orders, optionally by status or date range
      - order detail with line items
      - status transitions out of "active"
    """

    def __init__(self, order_repo: OrderRepository, analytics: AnalyticsService):
        self.order_repo = order_repo
        # Date-range lookups share the analytics range bounds
        self.analytics = analytics

    def list_orders(
        self,
        session: Session,
        seller_id: uuid.UUID,
        status_filter: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        return self.order_repo.list_for_seller(
            session, seller_id, status=status_filter, skip=skip, limit=limit
        )

    def list_orders_in_range(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
        status_filter: str | None = None,
    ) -> list[Order]:
        """
        Orders created on the store-local days start_date..end_date,
        newest first.
        """
        return self.analytics.fetch_orders(
            session, seller_id, start_date, end_date, status=status_filter
        )

    def get_order(
        self,
        session: Session,
        seller_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> OrderWithItemsRead:
        order = self._get_or_404(session, seller_id, order_id)
        items = self.order_repo.list_items_for_order(session, order.id)
        return self._build_order_with_items_dto(order, items)

    def update_status(
        self,
        session: Session,
        seller_id: uuid.UUID,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> Order:
        """
        Status update with simple state machine:

          active    -> completed, cancelled
          completed -> (no change)
          cancelled -> (no change)

        Setting the current status again is a no-op.
        Any other transition raises 400.
        """
        order = self._get_or_404(session, seller_id, order_id)

        current = order.status
        new = payload.status

        if current == new:
            return order

        if new not in ALLOWED_TRANSITIONS.get(current, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status transition: {current} -> {new}",
            )

        order.status = new
        order.updated_at = datetime.now(timezone.utc)
        order = self.order_repo.update_order(session, order)
        logger.info("Order %s moved %s -> %s", order.id, current, new)
        return order

    # -------- Helpers --------

    def _get_or_404(
        self,
        session: Session,
        seller_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> Order:
        order = self.order_repo.get_for_seller(session, seller_id, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    def _build_order_with_items_dto(
        self,
        order: Order,
        items: list[OrderItem],
    ) -> OrderWithItemsRead:
        return OrderWithItemsRead(
            id=order.id,
            seller_id=order.seller_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            products=[
                OrderItemRead(
                    product_id=it.product_id,
                    name=it.name,
                    quantity=it.quantity,
                    price=it.price,
                    line_total=round(it.quantity * it.price, 2),
                )
                for it in items
            ],
        )
