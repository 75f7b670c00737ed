import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.endpoints.forms import router as forms_router
from app.core.config import settings
from app.services.MailTransport import build_mail_transport

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""
    logger.info("🚀 Starting Good Shepherd forms backend...")

    try:
        app.state.mail_transport = build_mail_transport(settings)
        logger.info(f"✉️ Mail transport ready: {app.state.mail_transport.name}")
    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 Application startup complete")
        yield
    finally:
        logger.info("👋 Application shutdown complete")


app = FastAPI(
    title="Good Shepherd Forms API",
    description="Appointment, contact and FAQ form submissions with email notifications",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    logger.info(f"Origin: {request.headers.get('origin')}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health Check"])
async def health_check(request: Request):
    transport = getattr(request.app.state, "mail_transport", None)
    return {
        "status": "healthy" if transport is not None and settings.MAIL_CONFIGURED else "degraded",
        "service": "Good Shepherd Forms API",
        "environment": settings.ENVIRONMENT,
        "mail_transport": transport.name if transport is not None else None,
    }


app.include_router(forms_router)


def run():
    """Serve the API on the configured host and port."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
