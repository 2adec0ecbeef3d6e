"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from agrimonitor.config import settings
from agrimonitor.api.rate_limit import limiter
from agrimonitor.middleware.error_handler import ErrorHandlerMiddleware
from agrimonitor.api.v1.routers import validation

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"NDVI backend: {settings.ndvi_api_base_url} "
                f"(live={settings.has_live_credentials}, "
                f"mock_fallback={settings.mock_fallback_on_error})")
    logger.info(f"Scoring config: consistency_penalty={settings.consistency_penalty}, "
                f"coverage_saturation_images={settings.coverage_saturation_images}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    from agrimonitor.infrastructure.satellite_api_client import get_api_client
    logger.info("Shutting down application...")
    client = get_api_client()
    await client.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    description="""
    Satellite Data Validation API for Agricultural Monitoring

    This API turns monthly satellite vegetation index observations into
    validation scores, growth trend analysis and alert triage for the
    monitoring dashboard.

    ## Features

    - **Observation Normalization**: Deduplicate monthly observations and
      order them chronologically
    - **Validation Metrics**: Quality, consistency and coverage scores
    - **Growth Patterns**: Month-over-month NDVI trends and a realism check
    - **Vegetation Categories**: NDVI values mapped to display categories
    - **Mock Fallback**: Simulated data when no satellite credentials are configured
    - **Rate Limiting**: Protects the API from abuse

    ## Scores

    1. Quality: percent of months with high data quality
    2. Consistency: 100 minus 1000 x average standard deviation, floored at 0
    3. Coverage: average images per month against 10, capped at 100
    4. Overall: mean of the three
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(validation.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
