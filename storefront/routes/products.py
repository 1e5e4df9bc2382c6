"""Product API routes, proxied to the catalog service"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from ..errors import CatalogError, ProductNotFound
from ..models.product import Product, ProductFilter, ProductPage, SortOrder
from ..services.catalog_client import CatalogClient
from .dependencies import get_catalog_client

router = APIRouter(prefix="/api/products", tags=["Products"])


def catalog_error(error: CatalogError) -> HTTPException:
    """Map a catalog failure to a retryable HTTP error"""
    if isinstance(error, ProductNotFound):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=502, detail=str(error))


def product_filter(
    category: Optional[str] = Query(None, description="Filter by category"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price"),
    sort: Optional[SortOrder] = Query(None, description="Sort order"),
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Page size"),
) -> ProductFilter:
    return ProductFilter(
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        limit=limit,
    )


@router.get("", response_model=ProductPage)
async def list_products(
    filter: ProductFilter = Depends(product_filter),
    client: CatalogClient = Depends(get_catalog_client),
):
    """List products from the catalog"""
    try:
        return await client.list_products(filter)
    except CatalogError as e:
        raise catalog_error(e)


@router.get("/search", response_model=ProductPage)
async def search_products(
    term: str = Query(..., min_length=1, description="Search term"),
    filter: ProductFilter = Depends(product_filter),
    client: CatalogClient = Depends(get_catalog_client),
):
    """Search products by free text"""
    try:
        return await client.search_products(term, filter)
    except CatalogError as e:
        raise catalog_error(e)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    client: CatalogClient = Depends(get_catalog_client),
):
    """Get a product by ID"""
    try:
        return await client.get_product(product_id)
    except CatalogError as e:
        raise catalog_error(e)
