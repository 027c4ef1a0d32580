from contextlib import asynccontextmanager

import fastapi
import fastapi_swagger_dark as fsd
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.staticfiles import StaticFiles

from src.core.configs import settings
from src.core.db import create_tables
from src.routes import animals_router, auth_router, dashboard_router, users_router
from src.routes.error_handlers import register_error_handlers
from src.services.animals.assets import upload_root
from src.services.mail.verification import shutdown_mail_executor
from src.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables ensured")
    logger.info(f"{settings.app_name} API started")
    yield
    logger.info(f"{settings.app_name} API shutting down")
    shutdown_mail_executor()


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.description,
    version=settings.version,
    docs_url=None,
    redoc_url=settings.redoc_url,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

router = fastapi.APIRouter()
fsd.install(router)
app.include_router(router)

for routers in [
    auth_router,
    animals_router,
    users_router,
    dashboard_router,
]:
    app.include_router(routers)

# Uploaded animal photos, referenced by Animal.image
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=upload_root()),
    name="uploads",
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=settings.app_name,
        version=settings.version,
        description=settings.description,
        routes=app.routes,
    )
    components = openapi_schema.setdefault("components", {})
    security_schemes = components.setdefault("securitySchemes", {})
    security_schemes["BearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    # Apply globally so Swagger shows Authorize and sends the header
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.get("/", openapi_extra={"security": []})
async def root(request: Request):
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name} API",
        "version": settings.version,
        "docs": settings.docs_url,
    }


@app.get("/health", openapi_extra={"security": []})
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=True)
