import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    from roastery.api import cart_router, order_router, product_router, review_router, webhook_router
    from roastery.domain import roastery

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with roastery.domain_context():
            return await call_next(request)

    for router in (product_router, cart_router, order_router, review_router, webhook_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)
