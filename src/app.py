"""Storefront FastAPI application.

Single-domain web server that processes commands synchronously via HTTP and
pushes order status changes to WebSocket subscribers.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the domain.toml overlay (e.g. "production" for
# PostgreSQL). Initialized at module level so uvicorn workers share it.
from storefront.domain import storefront

storefront.init()

from storefront.api import cart_router, order_router, product_router, realtime_router  # noqa: E402
from storefront.api.errors import register_error_handlers  # noqa: E402
from storefront.notifications.realtime.fanout import (  # noqa: E402
    StatusFanout,
    attach_fanout,
    detach_fanout,
)
from storefront.notifications.realtime.registry import ChannelRegistry  # noqa: E402
from storefront.utils.logging import (  # noqa: E402
    bind_request_context,
    clear_request_context,
    configure_logging,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: logging and the real-time fan-out
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()

    fanout = StatusFanout(ChannelRegistry())
    attach_fanout(fanout)
    app.state.fanout = fanout
    logger.info("Storefront started", domain=storefront.name)

    yield

    detach_fanout()
    fanout.close()
    logger.info("Storefront stopped")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Products, shopping carts and orders with real-time status updates",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and bind a request id for logging."""
    request_id = request.headers.get("X-Request-Id") or str(uuid4())
    clear_request_context()
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)

    with storefront.domain_context():
        response = await call_next(request)

    response.headers["X-Request-Id"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(order_router)
app.include_router(cart_router)
app.include_router(product_router)
app.include_router(realtime_router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": storefront.name},
        }
    )
