# app/services/product_service.py
import logging
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.storage_utils import (
    delete_public_url,
    image_extension,
    upload_to_storage,
)
from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for a seller's product catalog.

    Responsibilities:
      - per-seller scoping (another seller's product is a 404)
      - updated_at bookkeeping
      - image upload/delete orchestration with Supabase
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Products -----

    def list_products(
        self,
        session: Session,
        seller_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        return self.repo.list_for_seller(session, seller_id, skip=skip, limit=limit)

    def get_product(
        self,
        session: Session,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> Product:
        product = self.repo.get_for_seller(session, seller_id, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(
        self,
        session: Session,
        seller_id: uuid.UUID,
        payload: ProductCreate,
    ) -> Product:
        product = Product(
            seller_id=seller_id,
            name=payload.name,
            price=payload.price,
            quantity=payload.quantity,
        )
        product = self.repo.create(session, product)
        logger.info("Seller %s added product %s", seller_id, product.id)
        return product

    def update_product(
        self,
        session: Session,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product.
        """
        product = self.get_product(session, seller_id, product_id)

        if payload.name is not None:
            product.name = payload.name

        if payload.price is not None:
            product.price = payload.price

        if payload.quantity is not None:
            product.quantity = payload.quantity

        product.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> None:
        """
        Delete a product and clean up its image in Storage.
        """
        product = self.get_product(session, seller_id, product_id)
        image_url = product.image_url

        self.repo.delete(session, product)
        logger.info("Seller %s deleted product %s", seller_id, product_id)

        if image_url:
            delete_public_url(image_url)

    # ----- Image -----

    def set_image(
        self,
        session: Session,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Product:
        """
        Upload or replace the product image.

        Path pattern:
            products/<product_id>/image.<ext>
        """
        product = self.get_product(session, seller_id, product_id)

        try:
            ext = image_extension(content_type, file_bytes)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail=str(exc),
            )
        if ext is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        old_url = product.image_url

        product.image_url = upload_to_storage(
            f"products/{product.id}/image.{ext}",
            file_bytes,
            content_type,
        )
        product.updated_at = datetime.now(timezone.utc)
        product = self.repo.update(session, product)

        if old_url and old_url != product.image_url:
            delete_public_url(old_url)
        return product
