"""Product models for the remote catalog"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SortOrder(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"


class Product(BaseModel):
    """Product in the catalog, as the catalog service sends it"""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str
    price: float = Field(ge=0)
    image: str = ""
    description: str = ""
    category: str = ""
    in_stock: bool = Field(default=True, alias="inStock")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class ProductFilter(BaseModel):
    """Options for listing products"""
    category: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    sort: Optional[SortOrder] = None
    page: Optional[int] = Field(default=None, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)

    def to_params(self) -> dict[str, str]:
        """Query parameters in the catalog's naming, unset options left out"""
        params = {
            "category": self.category,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "sort": self.sort.value if self.sort else None,
            "page": self.page,
            "limit": self.limit,
        }
        return {key: str(value) for key, value in params.items() if value is not None}


class PaginationMeta(BaseModel):
    """Pagination details returned alongside a product list"""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_page: int = Field(alias="totalPage")


class ProductPage(BaseModel):
    """An ordered page of products"""
    products: list[Product]
    meta: Optional[PaginationMeta] = None


class ProductListData(BaseModel):
    result: list[Product]
    meta: Optional[PaginationMeta] = None


class ProductListResponse(BaseModel):
    """Envelope of GET /products"""

    model_config = ConfigDict(populate_by_name=True)

    status: bool = True
    status_code: int = Field(default=200, alias="statusCode")
    message: str = ""
    data: ProductListData


class ProductResponse(BaseModel):
    """Envelope of GET /products/{id}"""

    model_config = ConfigDict(populate_by_name=True)

    status: bool = True
    status_code: int = Field(default=200, alias="statusCode")
    message: str = ""
    data: Product
