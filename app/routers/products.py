# app/routers/products.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from app.core.auth import SellerContext, require_complete_profile
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
):
    """
    List the seller's products, newest first.
    """
    return service.list_products(session, context.seller_id, skip=skip, limit=limit)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Get a single product by id.
    """
    return service.get_product(session, context.seller_id, product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Add a product to the catalog.
    """
    return service.create_product(session, context.seller_id, payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Update an existing product.
    """
    return service.update_product(session, context.seller_id, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Delete a product and its image.
    """
    service.delete_product(session, context.seller_id, product_id)
    return None


@router.post(
    "/{product_id}/image",
    response_model=ProductRead,
    summary="Upload or replace the product image",
)
def upload_image(
    product_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Upload a new image for the product.

    - Accepts JPEG, PNG, WEBP.
    - Overwrites any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_image(
        session=session,
        seller_id=context.seller_id,
        product_id=product_id,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )
