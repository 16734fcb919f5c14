"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies import build_payment_service
from src.api.endpoints.payments import payments_api
from src.database.payments import PaymentStore
from src.error_handler import ErrorHandler, RelayError
from src.integrations.policy.payment_service import GatewayClient
from src.utils.config_loader import RelayConfig, load_relay_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Payment Relay"
SERVICE_VERSION = "1.0.0"

error_handler = ErrorHandler()


def create_app(
    config: Optional[RelayConfig] = None,
    store: Optional[PaymentStore] = None,
    gateway: Optional[GatewayClient] = None,
) -> FastAPI:
    config = config or load_relay_config()

    app = FastAPI(
        title=f"{SERVICE_NAME} API",
        description="Relays mobile money charges to Paystack and tracks their status",
        version=SERVICE_VERSION,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # DEPENDENCY INJECTION
    # ========================================================================
    app.state.config = config
    app.state.payment_service = build_payment_service(config, store=store, gateway=gateway)

    app.include_router(payments_api)

    # ========================================================================
    # ERROR HANDLING
    # ========================================================================
    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        logger.warning("Rejected %s %s (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
        return error_handler.to_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse({"error": "invalid request", "details": _jsonable_errors(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return JSONResponse(error_handler.handle_exception(exc, context={"path": request.url.path}), status_code=500)

    # ========================================================================
    # ENDPOINTS
    # ========================================================================
    @app.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return _health(app)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check including the record store."""
        store = app.state.payment_service.store
        return {**_health(app), "store": "connected" if store.ping() else "unavailable"}

    # ========================================================================
    # STARTUP/SHUTDOWN EVENTS
    # ========================================================================
    @app.on_event("startup")
    async def startup_event():
        """Initialize on startup"""
        logger.info("Starting %s on port %s (base URL %s)...", SERVICE_NAME, config.server.port, config.server.base_url)
        if config.use_mock_gateway:
            logger.info("Using mock gateway; no charges reach Paystack")
        if not config.paystack.secret_key:
            logger.warning("PAYSTACK_SECRET_KEY is not set; charges will fail and every webhook will be rejected")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", SERVICE_NAME)

    return app


def _health(app: FastAPI):
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "version": SERVICE_VERSION,
        "records": len(app.state.payment_service.store),
        "timestamp": datetime.now().isoformat(),
    }


def _jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception objects that JSONResponse cannot serialize
    return [{k: v for k, v in err.items() if k in ("loc", "msg", "type")} for err in exc.errors()]


app = create_app()
