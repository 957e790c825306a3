"""
Main FastAPI application for the Meters service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..dispatcher import QueryDispatcher
from ..graphql.schema import create_graphql_router, validate_schema
from ..logging import configure_logging, get_logger
from ..lookup import MeterLookup, create_lookup
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


def create_app(lookup: MeterLookup | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        lookup: Meter lookup to serve. Built from ``settings.meter_source_path``
            when omitted.
    """
    if lookup is None:
        lookup = create_lookup(settings.meter_source_path)

    dispatcher = QueryDispatcher(lookup)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting Meters API...",
            environment=settings.environment,
            operations=dispatcher.operations,
        )
        yield
        logger.info("Shutting down Meters API...")

    app = FastAPI(
        title="Meters API",
        description="Read-only GraphQL queries over meter records",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.dispatcher = dispatcher

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Fail fast: the server should not start with a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(dispatcher), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint=settings.graphql_path)

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "meters.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
