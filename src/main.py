import logging
from typing import Optional

from fastapi import FastAPI, Depends
from fastapi.openapi.docs import get_swagger_ui_html, get_redoc_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse

from config.dependencies import get_current_user
from config.settings import BaseAppSettings, get_settings
from database.models.accounts import UserModel
from payments.registry import PaymentClassRegistry, register_payment_classes
from routers import accounts, cards, backend, checkout


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


def create_app(settings: Optional[BaseAppSettings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Besides mounting the routers, this populates the payment class registry
    once for the lifetime of the application.

    Args:
        settings (Optional[BaseAppSettings]): Settings to use instead of the
            ones derived from the environment.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Stripe Payment API",
        description="""
        # Stripe Payment API Documentation

        ## Overview
        Stripe credit card payments for the shop: stored cards in the
        customer account and partial refunds in the backend.

        ## Features
        - **Credit cards**: List, store and delete the customer's Stripe cards
        - **Refunds**: Refund order positions and log them on the order
        - **Checkout**: Payment method classes, payment data validation and the
          preselected card of the checkout

        ## Authentication
        Endpoints require a JWT access token in the Authorization header or in
        the `access_token` cookie set at login.
        Refund endpoints are restricted to backend administrators.
        """,
        version="1.0.0",
        servers=[
            {
                "url": "http://localhost:8000",
                "description": "Development server"
            }
        ],
        docs_url=None,
        redoc_url=None,
    )

    registry = PaymentClassRegistry()
    register_payment_classes(registry, settings.SHOP_TEMPLATE_VERSION)
    app.state.payment_classes = registry

    api_version_index = "/api/v1"

    app.include_router(
        accounts.router,
        prefix=f"{api_version_index}/accounts",
        tags=["accounts"]
    )
    app.include_router(
        cards.router,
        prefix=f"{api_version_index}/account/stripe",
        tags=["cards"]
    )
    app.include_router(
        backend.router,
        prefix=f"{api_version_index}/backend/stripe-payment",
        tags=["refunds"]
    )
    app.include_router(
        checkout.router,
        prefix=f"{api_version_index}/checkout",
        tags=["checkout"]
    )

    register_system_routes(app)
    return app


def register_system_routes(app: FastAPI) -> None:
    """Attach the protected API documentation and the health check."""

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "JWT token obtained from login endpoint"
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    @app.get("/docs", include_in_schema=False)
    async def get_swagger_documentation(
        authorized: UserModel = Depends(get_current_user)
    ) -> HTMLResponse:
        return get_swagger_ui_html(
            openapi_url=app.openapi_url or "/openapi.json",
            title=f"{app.title} - Swagger UI",
        )

    @app.get("/redoc", include_in_schema=False)
    async def get_redoc_documentation(
        authorized: UserModel = Depends(get_current_user)
    ) -> HTMLResponse:
        return get_redoc_html(
            openapi_url=app.openapi_url or "/openapi.json",
            title=f"{app.title} - ReDoc",
        )

    @app.get(
        "/health",
        tags=["system"],
        summary="Health Check",
        description="Check if the API is running and healthy",
        responses={
            200: {
                "description": "API is healthy and operational",
                "content": {
                    "application/json": {
                        "example": {
                            "status": "healthy",
                            "version": "1.0.0"
                        }
                    }
                }
            }
        }
    )
    async def health_check():
        return {
            "status": "healthy",
            "version": app.version
        }


app = create_app()
