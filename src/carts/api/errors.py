"""HTTP mapping for cart errors.

Protean's standard handlers cover its own exceptions; every ``CartError``
answers with its own status code and ``{"error": {code: [detail]}}``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from carts.errors import CartError


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(CartError)
    async def cart_error_handler(request: Request, exc: CartError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.messages})
