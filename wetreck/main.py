import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wetreck.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

from wetreck.database import Base, SessionLocal, engine
from wetreck.dependencies import get_admin_email, get_email_sender
from wetreck.bookings import router as bookings_router
from wetreck.memberships import router as memberships_router
from wetreck.memberships.scanner import ExpirationScanner
from wetreck.payments.router import router as payments_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    Base.metadata.create_all(bind=engine)

    scanner_task = None
    if settings.EXPIRATION_SCAN_ENABLED:
        scanner = ExpirationScanner(
            session_factory=SessionLocal,
            email_sender=get_email_sender(),
            admin_email=get_admin_email(),
            run_at=time(settings.EXPIRATION_SCAN_HOUR, settings.EXPIRATION_SCAN_MINUTE)
        )
        scanner_task = asyncio.create_task(scanner.run_daily())

    try:
        yield
    finally:
        # Shutdown
        if scanner_task:
            scanner_task.cancel()
            await asyncio.gather(scanner_task, return_exceptions=True)
        get_email_sender().close()

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Tour, trek and bike booking and membership intake API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    bookings_router,
    prefix="/api/v2",
    tags=["Bookings"]
)

app.include_router(
    memberships_router,
    prefix="/api",
    tags=["Memberships"]
)

app.include_router(
    payments_router,
    prefix="/api/payment",
    tags=["Payments"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Backend server running on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
