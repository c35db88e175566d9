from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authz_service.api.authorize import router as authorize_router
from authz_service.api.errors import register_exception_handlers
from authz_service.api.greetings import router as greetings_router
from authz_service.api.health import router as health_router
from authz_service.api.metrics_endpoint import router as metrics_router
from authz_service.api.secured import router as secured_router
from authz_service.core.config import SETTINGS
from authz_service.core.logging import setup_logging
from authz_service.middleware.metrics import MetricsMiddleware
from authz_service.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

# only app setup + router registration

app = FastAPI(
    title="authz-service",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

register_exception_handlers(app)

# A wildcard origin can't be combined with credentials
_allow_any_origin = "*" in SETTINGS.cors_allow_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if _allow_any_origin else list(SETTINGS.cors_allow_origins),
    allow_credentials=not _allow_any_origin,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → CORS → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(greetings_router)
app.include_router(authorize_router)
app.include_router(secured_router)

logger.info(
    "authz-service started  env=%s log_level=%s trust_store=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    "static" if SETTINGS.trusted_bearer_tokens else "accept_all",
    "on" if SETTINGS.is_dev else "off",
)
