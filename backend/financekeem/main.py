"""
FastAPI application
FinanceKeem - lead capture, assessment and scheduling
"""
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from . import database
from .config import get_settings
from .errors import Conflict, NotFound, StorageUnavailable, ValidationError
from .routes.booking_pages import router as booking_pages_router
from .routes.bookings import router as bookings_router
from .routes.dashboard import router as dashboard_router
from .routes.forms import router as forms_router
from .routes.leads import router as leads_router
from .routes.public import router as public_router
from .routes.quizzes import router as quizzes_router
from .services.notifications import notify_storage_error
from .storage import Store, get_store

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FinanceKeem API",
    description="Lead capture, protection assessment and booking",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [settings.SITE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session Middleware (admin panel login)
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)


# ==================== Error handlers ====================

@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(Conflict)
async def conflict_handler(request: Request, exc: Conflict):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error(f"Storage unavailable on {request.method} {request.url.path}: {exc.message}")
    await notify_storage_error(
        f"{request.method} {request.url.path}",
        exc.__cause__ or exc,
        {"environment": settings.ENVIRONMENT}
    )
    return JSONResponse(
        status_code=503,
        content={"detail": "The service is temporarily unavailable, please try again."}
    )


# ==================== Routers ====================

app.include_router(leads_router)
app.include_router(forms_router)
app.include_router(quizzes_router)
app.include_router(booking_pages_router)
app.include_router(bookings_router)
app.include_router(dashboard_router)
app.include_router(public_router)

# Admin panel (SQL backend only)
if database.engine is not None:
    from .admin import setup_admin

    setup_admin(app, database.engine)
    logger.info("Admin panel available at /admin")


@app.get("/health")
async def health_check(store: Store = Depends(get_store)):
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "storage": store.name,
        "storage_available": store.ping(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("financekeem.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)
