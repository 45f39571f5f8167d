# app/repositories/seller_repo.py
import uuid

from sqlmodel import Session

from app.models.seller import Seller


class SellerRepository:
    """
    Data access layer for Seller.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, seller_id: uuid.UUID) -> Seller | None:
        """Return a Seller by primary key, or None if not found."""
        return session.get(Seller, seller_id)

    def create(self, session: Session, seller: Seller) -> Seller:
        """Insert a new Seller and return the persisted row."""
        session.add(seller)
        session.commit()
        session.refresh(seller)
        return seller

    def update(self, session: Session, seller: Seller) -> Seller:
        """Persist changes to an existing Seller."""
        session.add(seller)
        session.commit()
        session.refresh(seller)
        return seller
