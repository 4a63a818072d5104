"""
Main application entry point
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import router as api_router
from .core.config import settings
from .core.exceptions import BoligscoreException, from_domain_exception
from .core.logging import setup_logging, get_logger

# Set up logging
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Boligscore API",
    description="Catalog candidate properties and rank them by a weighted multi-criterion score",
    version=settings.VERSION
)

# Get CORS origins from settings
cors_origins = settings.get_cors_origins()
logger.info("Configuring CORS", allowed_origins=cors_origins)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.exception_handler(BoligscoreException)
async def domain_exception_handler(request: Request, exc: BoligscoreException):
    """Domain errors that escaped an endpoint still get the structured error body"""
    logger.warning("Unhandled domain error", path=request.url.path, error_code=exc.error_code)
    http_exc = from_domain_exception(exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})

@app.get("/")
async def root():
    return {"message": "Boligscore Property Ranking System"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
