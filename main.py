"""
main.py
-------
Entry point for the Kyper3D storefront API.

Responsibilities:
    - Build the FastAPI application with all routers and error mappings.
    - Own the database connection pool for the process lifetime
      (created on startup, closed on shutdown).
    - Run the server with uvicorn when executed directly.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import API_HOST, CORS_ORIGINS, PORT
from db.connection import ConnectionPool
from db.init_db import create_tables
from handlers import brand_handler, health_handler, order_handler, product_handler, user_handler
from handlers.errors import register_error_handlers
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(pool: Optional[ConnectionPool] = None) -> FastAPI:
    """
    Build the application.

    Args:
        pool: A ready connection pool. When omitted, one is created from
            config on startup, the schema is initialized, and the pool is
            closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_pool = pool is None
        if owns_pool:
            logger.info("Initializing database...")
            app.state.pool = ConnectionPool.from_config()
            create_tables(app.state.pool)
        else:
            app.state.pool = pool
        try:
            yield
        finally:
            if owns_pool:
                app.state.pool.close()
            logger.info("Kyper3D API stopped.")

    app = FastAPI(title="Kyper3D API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health_handler.router)
    app.include_router(product_handler.router)
    app.include_router(order_handler.router)
    app.include_router(brand_handler.router)
    app.include_router(user_handler.router)
    return app


def main() -> None:
    """Run the API server."""
    logger.info(f"Server running on port {PORT}")
    uvicorn.run(create_app(), host=API_HOST, port=PORT)


if __name__ == "__main__":
    main()
