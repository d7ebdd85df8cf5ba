import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import cart_router, order_router, product_router, realtime_router
from storefront.api.errors import register_error_handlers

SELLER = {"X-User-Id": "seller-1", "X-User-Role": "Seller"}


@pytest.fixture()
def app(fanout):
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(product_router)
    app.include_router(realtime_router)
    register_error_handlers(app)
    app.state.fanout = fanout
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def product_id(client):
    response = client.post("/products", json={"product_name": "Widget", "price": 9.99}, headers=SELLER)
    assert response.status_code == 201
    return response.json()["product_id"]
