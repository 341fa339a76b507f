from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import logger
from app.routers import auth, profile, industries, onboarding, compliance_items, admin
from app.stores import StoreBackend, get_backend

# Tables are managed by Alembic migrations, not Base.metadata.create_all

app = FastAPI(
    title="CompliSA Compliance API",
    version="1.0.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    redirect_slashes=False  # Disable automatic redirects to prevent POST data loss
)

# Configure CORS for the browser front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])
app.include_router(industries.router, prefix="/api/industries", tags=["Industries"])
app.include_router(onboarding.router, prefix="/api/onboarding", tags=["Onboarding"])
app.include_router(compliance_items.router, prefix="/api/compliance-items", tags=["Compliance Items"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.on_event("startup")
def select_store_backend():
    # Resolve once so the choice is logged at boot rather than on first request
    get_backend()


@app.get("/health")
def health_check(backend: StoreBackend = Depends(get_backend)):
    if backend.name != "database":
        return {"status": "healthy", "database": "not configured", "store": backend.name}
    try:
        with backend.session_factory() as db:
            db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
            "store": backend.name
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
