# app/repositories/order_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from app.models.order import Order, OrderItem


class OrderRepository:
    """
    Data access layer for orders and order_items.

    All listings are ordered by created_at descending.
    """

    # ---- Orders ----

    def list_for_seller(
        self,
        session: Session,
        seller_id: uuid.UUID,
        status: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = select(Order).where(Order.seller_id == seller_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_in_range(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start: datetime,
        end: datetime,
        status: str | None = None,
    ) -> list[Order]:
        """
        Orders whose created_at lies in [start, end] (both inclusive).
        """
        stmt = select(Order).where(
            Order.seller_id == seller_id,
            Order.created_at >= start,
            Order.created_at <= end,
        )
        if status is not None:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc())
        return list(session.exec(stmt).all())

    def get_for_seller(
        self,
        session: Session,
        seller_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> Order | None:
        stmt = select(Order).where(
            Order.id == order_id,
            Order.seller_id == seller_id,
        )
        return session.exec(stmt).first()

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    # ---- Order items ----

    def list_items_for_order(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> list[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.position)
        )
        return list(session.exec(stmt).all())
