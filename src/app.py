"""Carts FastAPI application.

Serves the storefront cart: guest and customer carts, their totals, and the
guest-to-customer merge at sign-in. Commands are processed synchronously and
each request is wrapped in the carts domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory stores
#   - "production" → PostgreSQL
from carts.domain import carts  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

carts.init()

# Development and load testing run against the in-memory catalogue; production
# swaps in a real adapter with set_catalog().
from carts import settings  # noqa: E402
from carts.catalog import InMemoryCatalog, get_catalog  # noqa: E402

_catalog = get_catalog()
if settings.demo_products() and isinstance(_catalog, InMemoryCatalog):
    _catalog.stock_demo(settings.demo_products())

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/cart": carts,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront Carts API",
    description="Guest and customer shopping carts",
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
    """Push the carts domain context for each cart request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match, pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from carts.api import register_error_handlers  # noqa: E402
from carts.api import router as cart_router  # noqa: E402

register_error_handlers(app)
app.include_router(cart_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "carts": {"name": carts.name},
            },
        }
    )
