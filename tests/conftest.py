import json

import httpx
import pytest

from storefront.models.product import Product
from storefront.services.catalog_client import CatalogClient

BASE_URL = "https://catalog.test/api"


def make_product(product_id: str = "p1", price: float = 10.0, **overrides) -> Product:
    data = {
        "_id": product_id,
        "title": f"Product {product_id}",
        "price": price,
        "image": f"https://img.test/{product_id}.jpg",
        "description": "A product",
        "category": "Electronics",
        "inStock": True,
    }
    data.update(overrides)
    return Product.model_validate(data)


def product_json(product: Product) -> dict:
    return json.loads(product.model_dump_json(by_alias=True))


def make_client(handler) -> CatalogClient:
    """Catalog client whose HTTP calls are answered by `handler`"""
    return CatalogClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class RecordingCatalog:
    """Fake catalog service that records requests"""

    def __init__(self, products=None, order_status: int = 201, order_error: Exception = None):
        self.products = {p.id: p for p in (products or [])}
        self.order_status = order_status
        self.order_error = order_error
        self.requests: list[httpx.Request] = []

    @property
    def order_bodies(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path.endswith("/orders")
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path.endswith("/orders"):
            if self.order_error is not None:
                raise self.order_error
            return httpx.Response(
                self.order_status,
                json={
                    "status": self.order_status < 400,
                    "statusCode": self.order_status,
                    "message": "Order created" if self.order_status < 400 else "Failed",
                    "data": {"orderId": "order-1"},
                },
            )

        if path.endswith("/products"):
            products = list(self.products.values())
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "statusCode": 200,
                    "message": "Products retrieved",
                    "data": {
                        "result": [product_json(p) for p in products],
                        "meta": {"page": 1, "limit": 20, "total": len(products), "totalPage": 1},
                    },
                },
            )

        product_id = path.rsplit("/", 1)[-1]
        if product_id in self.products:
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "statusCode": 200,
                    "message": "Product retrieved",
                    "data": product_json(self.products[product_id]),
                },
            )
        return httpx.Response(404, json={"status": False, "statusCode": 404, "message": "Not found"})


@pytest.fixture
def catalog():
    return RecordingCatalog(products=[make_product("p1", 10.0), make_product("p2", 25.0)])


@pytest.fixture
def client(catalog):
    return make_client(catalog)
