"""
Product management API endpoints.
Provides listing with search and pagination, CRUD by ID, and a purchase
action that takes units out of stock.
"""

from typing import List
from uuid import UUID, uuid4

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Path,
    Query,
    Request,
    Response,
    status,
)
from fastapi.responses import PlainTextResponse

from app.core.config.settings import settings
from app.core.dependencies import get_product_repository, get_product_service
from app.core.exceptions.exceptions import (
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from app.core.logging import get_logger
from app.domain.models.common import utc_now
from app.domain.models.product import Product, ProductCreate, ProductStatus
from app.domain.services.product_service import ProductService
from app.infrastructure.database.repositories.product_repository import (
    ProductRepositoryInterface,
)

router = APIRouter(prefix="/products", tags=["Products"])
logger = get_logger(__name__)

PURCHASE_SUCCESS_MSG = "Product purchased successfully."
PURCHASE_FAILED_MSG = "Failed to purchase the product."
PRODUCT_NOT_FOUND_MSG = "Product not found"


def _internal_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )


@router.get("", response_model=List[Product], summary="List products")
async def get_products(
    skip: int = Query(0, ge=0, description="Number of products to skip"),
    take: int = Query(
        settings.default_page_size, ge=0, description="Number of products to return"
    ),
    search_term: str = Query(
        "", alias="searchTerm", description="Text to match in product names"
    ),
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
    product_service: ProductService = Depends(get_product_service),
) -> List[Product]:
    """
    List products.

    Loads every product, filters by the search term, then returns the
    ``[skip, skip + take)`` window of the result.

    Args:
        skip: Number of matching products to skip
        take: Maximum number of products to return
        search_term: Name filter; blank returns everything
        product_repository: Injected product repository
        product_service: Injected product service

    Returns:
        The requested page of products, possibly empty

    Raises:
        HTTPException(400): Negative skip or take
        HTTPException(500): Product store failure
    """
    try:
        products = await product_repository.get_all()
    except RepositoryError as e:
        logger.error("Product listing failed", extra={"error": e.message})
        raise _internal_error("An error occurred while retrieving products.")

    products = product_service.search_products(products, search_term)
    page = products[skip : skip + take]

    logger.debug(
        "Products listed",
        extra={
            "skip": skip,
            "take": take,
            "search_term": search_term,
            "matched": len(products),
            "returned": len(page),
        },
    )
    return page


@router.get("/{product_id}", response_model=Product, summary="Get product by ID")
async def get_product_by_id(
    product_id: UUID = Path(..., description="Product ID"),
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
) -> Product:
    """
    Get product details by ID.

    Raises:
        HTTPException(400): Malformed product ID
        HTTPException(404): Product not found
        HTTPException(500): Product store failure
    """
    try:
        product = await product_repository.get_by_id(product_id)
    except RepositoryError as e:
        logger.error(
            "Product retrieval failed",
            extra={"product_id": str(product_id), "error": e.message},
        )
        raise _internal_error("An error occurred while retrieving the product.")

    if product is None:
        logger.warning("Product not found", extra={"product_id": str(product_id)})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=PRODUCT_NOT_FOUND_MSG
        )

    return product


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create new product",
)
async def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
) -> Product:
    """
    Create a new product.

    The ID, status and creation date are assigned here; any values the
    caller sends for them are ignored. New products start in stock.

    Args:
        payload: Product fields supplied by the caller
        request: Current request, used to build the Location header
        response: Outgoing response
        product_repository: Injected product repository

    Returns:
        The created product, with a Location header pointing at it

    Raises:
        HTTPException(400): Invalid input data
        HTTPException(500): Product store failure
    """
    product = Product(
        **payload.model_dump(),
        id=uuid4(),
        status=ProductStatus.IN_STOCK,
        created_date=utc_now(),
    )

    try:
        await product_repository.add(product)
    except RepositoryError as e:
        logger.error("Product creation failed", extra={"error": e.message})
        raise _internal_error("An error occurred while posting the product.")

    response.headers["Location"] = str(
        request.url_for("get_product_by_id", product_id=str(product.id))
    )
    logger.info(
        "Product created successfully",
        extra={"product_id": str(product.id), "product_name": product.name},
    )
    return product


@router.put("/{product_id}", response_model=Product, summary="Update product")
async def update_product(
    product: Product,
    product_id: UUID = Path(..., description="Product ID"),
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
    product_service: ProductService = Depends(get_product_service),
) -> Product:
    """
    Update an existing product.

    The body must carry the same ID as the path. The creation date is never
    overwritten and the status is derived from the new stock quantity.

    Raises:
        HTTPException(400): Body ID does not match the path, or invalid input
        HTTPException(404): Product not found
        HTTPException(500): Product store failure
    """
    if product.id != product_id:
        logger.warning(
            "Product ID mismatch on update",
            extra={"path_id": str(product_id), "body_id": str(product.id)},
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product ID in the path does not match the request body.",
        )

    product_service.apply_stock_status(product)

    try:
        stored = await product_repository.update(product)
    except RepositoryError as e:
        logger.error(
            "Product update failed",
            extra={"product_id": str(product_id), "error": e.message},
        )
        raise _internal_error("An error occurred while updating the product.")

    if stored is None:
        logger.warning("Product not found", extra={"product_id": str(product_id)})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=PRODUCT_NOT_FOUND_MSG
        )

    logger.info("Product updated successfully", extra={"product_id": str(product_id)})
    return stored


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete product",
)
async def delete_product(
    product_id: UUID = Path(..., description="Product ID"),
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
) -> Response:
    """
    Delete a product permanently.

    Raises:
        HTTPException(404): Product not found
        HTTPException(500): Product store failure
    """
    try:
        product = await product_repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError(PRODUCT_NOT_FOUND_MSG)
        await product_repository.delete(product_id)
    except NotFoundError as e:
        logger.warning("Product not found", extra={"product_id": str(product_id)})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except RepositoryError as e:
        logger.error(
            "Product deletion failed",
            extra={"product_id": str(product_id), "error": e.message},
        )
        raise _internal_error("An error occurred while deleting the product.")

    logger.info("Product deleted", extra={"product_id": str(product_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{product_id}/buy",
    response_class=PlainTextResponse,
    summary="Buy product",
)
async def buy_product(
    product_id: UUID = Path(..., description="Product ID"),
    quantity: int = Query(..., ge=1, description="Units to purchase"),
    product_repository: ProductRepositoryInterface = Depends(get_product_repository),
    product_service: ProductService = Depends(get_product_service),
) -> str:
    """
    Buy a quantity of a product.

    Rejects early when the current snapshot shows the product out of stock
    or short of the requested quantity. The purchase itself is a single
    conditional stock decrement, which may still fail if a concurrent
    purchase got there first.

    Args:
        product_id: Product to purchase
        quantity: Units to purchase, at least 1
        product_repository: Injected product repository
        product_service: Injected product service

    Returns:
        Plain-text confirmation

    Raises:
        HTTPException(400): Out of stock, insufficient stock, or purchase failed
        HTTPException(404): Product not found
        HTTPException(500): Product store failure
    """
    try:
        product = await product_repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError(PRODUCT_NOT_FOUND_MSG)

        product_service.check_purchasable(product, quantity)
        purchased = await product_service.buy(product.id, quantity)
    except NotFoundError as e:
        logger.warning("Product not found", extra={"product_id": str(product_id)})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        logger.warning(
            "Purchase rejected",
            extra={
                "product_id": str(product_id),
                "quantity": quantity,
                "error": e.message,
            },
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except RepositoryError as e:
        logger.error(
            "Purchase failed",
            extra={"product_id": str(product_id), "error": e.message},
        )
        raise _internal_error("An error occurred while processing the request.")

    if not purchased:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=PURCHASE_FAILED_MSG
        )

    return PURCHASE_SUCCESS_MSG
