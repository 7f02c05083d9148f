"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopfront.api import auth, shops, users
from shopfront.api.subdomain import shop_subdomain_middleware
from shopfront.config import get_settings
from shopfront.errors import ShopfrontError, ValidationError

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(
        f"Starting Shopfront API ({settings.environment}), "
        f"shops served on *.{settings.base_domain}"
    )
    yield
    logger.info("Shopfront API shutting down")


app = FastAPI(
    title="Shopfront API",
    description="Multi-tenant shop management with subdomain shops and JWT authentication",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ShopfrontError)
async def shopfront_error_handler(request: Request, exc: ShopfrontError):
    """Render domain errors as ``{statusCode, message, error}``."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with one message per problem."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    error = ValidationError(messages or ["Invalid request"])
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_dict())


# Shop subdomains are answered before routing; registered first so CORS wraps it
app.middleware("http")(shop_subdomain_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-CSRF-Token"],
)

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(shops.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
