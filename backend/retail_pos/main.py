import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retail_pos import __version__
from retail_pos.api import auth, exports, imports, messaging, modules, preferences, receipts
from retail_pos.core.config import settings
from retail_pos.core.logging import configure_logging
from retail_pos.services.auth_bridge import AuthEvent, get_user_channel

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Retail POS back office: role-gated modules, import/export, receipts and WhatsApp alerts",
    version=__version__,
)

# CORS - restrict in production via env
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(modules.router)
app.include_router(imports.router)
app.include_router(exports.router)
app.include_router(receipts.router)
app.include_router(messaging.router)
app.include_router(preferences.router)


def log_auth_event(event: AuthEvent, user) -> None:
    logger.info("%s: %s", event.value, getattr(user, "email", "-"))


# Auth events for the whole process flow through one channel
auth_subscription = get_user_channel().subscribe(log_auth_event)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": __version__}
