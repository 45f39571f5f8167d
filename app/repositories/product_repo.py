# app/repositories/product_repo.py
import uuid

from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for a seller's products.

    - Pure DB operations (CRUD + queries).
    - Every query is scoped by seller_id.
    - No FastAPI, no business logic.
    """

    def get_for_seller(
        self,
        session: Session,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> Product | None:
        stmt = select(Product).where(
            Product.id == product_id,
            Product.seller_id == seller_id,
        )
        return session.exec(stmt).first()

    def list_for_seller(
        self,
        session: Session,
        seller_id: uuid.UUID,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Product]:
        """
        Newest first. limit=None returns the full catalog (used by the
        dashboard inventory total).
        """
        stmt = (
            select(Product)
            .where(Product.seller_id == seller_id)
            .order_by(Product.created_at.desc())
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(session.exec(stmt).all())

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()
