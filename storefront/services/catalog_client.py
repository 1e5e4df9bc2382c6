"""
Catalog API Client

HTTP client for the remote catalog service.
Reads products and submits orders, translating failures into
storefront errors.
"""

import logging
from typing import Optional, Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from ..errors import (
    CatalogMalformed,
    CatalogUnavailable,
    OrderSubmissionFailed,
    ProductNotFound,
)
from ..models.checkout import OrderConfirmation, OrderRequest
from ..models.product import (
    Product,
    ProductFilter,
    ProductListResponse,
    ProductPage,
    ProductResponse,
)

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Client for the catalog service.

    Every call is independent: no caching, no retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Base URL of the catalog API
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
        error_message: str = "Failed to fetch products",
        product_id: Optional[str] = None,
    ) -> Any:
        """
        GET a catalog resource and return the decoded JSON body.

        A non-success status raises ProductNotFound when `product_id`
        is given, CatalogUnavailable otherwise.
        """
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.get(
                url,
                params=params,
                headers=self._generate_headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise CatalogUnavailable(f"{error_message}: {e}") from e

        if not response.is_success:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            message = f"{error_message}: HTTP {response.status_code}"
            if product_id is not None:
                raise ProductNotFound(product_id, message)
            raise CatalogUnavailable(message)

        try:
            return response.json()
        except ValueError as e:
            raise CatalogMalformed(f"Catalog returned invalid JSON for {path}") from e

    def _parse_page(self, payload: Any) -> ProductPage:
        try:
            envelope = ProductListResponse.model_validate(payload)
        except SchemaError as e:
            raise CatalogMalformed(f"Unexpected product list shape: {e}") from e
        return ProductPage(products=envelope.data.result, meta=envelope.data.meta)

    # ==================== Product APIs ====================

    async def list_products(self, filter: Optional[ProductFilter] = None) -> ProductPage:
        """List products, optionally filtered, sorted and paginated"""
        params = filter.to_params() if filter else {}
        payload = await self._get("/products", params=params)
        page = self._parse_page(payload)
        logger.debug(f"Fetched {len(page.products)} products with {params}")
        return page

    async def get_product(self, product_id: str) -> Product:
        """Get product details"""
        payload = await self._get(
            f"/products/{quote(product_id, safe='')}",
            error_message="Failed to fetch product",
            product_id=product_id,
        )

        try:
            return ProductResponse.model_validate(payload).data
        except SchemaError as e:
            raise CatalogMalformed(f"Unexpected product shape: {e}") from e

    async def search_products(
        self,
        term: str,
        filter: Optional[ProductFilter] = None,
    ) -> ProductPage:
        """Search products by free-text term"""
        params = filter.to_params() if filter else {}
        params["searchTerm"] = term
        payload = await self._get(
            "/products",
            params=params,
            error_message="Failed to search products",
        )
        return self._parse_page(payload)

    # ==================== Order APIs ====================

    async def create_order(self, order: OrderRequest) -> OrderConfirmation:
        """Submit an order built from a cart snapshot"""
        url = f"{self.base_url}/orders"

        try:
            response = await self._http_client.post(
                url,
                json=order.model_dump(by_alias=True),
                headers=self._generate_headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Order request failed: {e}")
            raise OrderSubmissionFailed("Failed to create order", cause=e) from e

        if not response.is_success:
            logger.error(f"Order request failed: {response.status_code} - {response.text}")
            raise OrderSubmissionFailed(
                f"Failed to create order: HTTP {response.status_code}"
            )

        # The confirmation body is informational; an unreadable one still means success
        try:
            return OrderConfirmation.model_validate(response.json())
        except (ValueError, SchemaError):
            logger.warning("Order accepted but confirmation body could not be parsed")
            return OrderConfirmation(status_code=response.status_code)
