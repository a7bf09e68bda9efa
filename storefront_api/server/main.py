"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_api import __version__
from storefront_api.core.logging_config import get_logger, setup_logging
from storefront_api.core.monitoring import initialize_logfire

from .api import health, orders, products, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.deps import get_database

setup_logging()
logger = get_logger(__name__)

RESOURCE_ROUTES = (
    ("users", "Users management"),
    ("products", "Products management"),
    ("orders", "Orders management"),
)


def startup_banner(base_url: str) -> str:
    """Describe where the server listens and which routes it mounts."""
    rule = "=" * 50
    lines = [
        rule,
        f"Server running on {base_url}",
        f"Health Check: {base_url}/health",
        "API Routes:",
    ]
    lines.extend(f"   - {constant.API_PREFIX}/{name} ({label})" for name, label in RESOURCE_ROUTES)
    lines.append(rule)
    return "\n".join(lines)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Opens the JSON data directory on startup and logs the startup banner.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME}...")
    db = get_database()
    logger.info(f"Data directory ready: {db.data_dir}")
    logger.info(startup_banner(f"http://localhost:{settings.server_port}"))

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME}...")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routers."""
    application = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        Storefront API

        CRUD endpoints for users, products and orders, persisted as JSON files.
        Every response uses the same envelope: status, statusCode, message, data, timestamp.
        """,
        version=__version__,
        lifespan=lifespan,
    )

    cors = settings.cors
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )
    application.add_middleware(LogfireMiddleware)

    setup_exception_handlers(application)

    application.include_router(health.router, tags=["health"])
    application.include_router(users.router, prefix=f"{constant.API_PREFIX}/users")
    application.include_router(products.router, prefix=f"{constant.API_PREFIX}/products")
    application.include_router(orders.router, prefix=f"{constant.API_PREFIX}/orders")

    initialize_logfire(application)
    return application


app = create_app()
