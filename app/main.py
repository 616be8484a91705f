import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings, Settings
from app.core.errors import register_error_handlers
from app.core.validation import request_validation_error_handler
from app.modules.auth import routes as auth_routes
from app.modules.profiles import routes as profiles_routes
from app.modules.products import routes as products_routes
from app.modules.reviews import routes as reviews_routes
from app.modules.cart import routes as cart_routes
from app.modules.push_subscriptions import routes as push_subscriptions_routes
from app.modules.admin_tokens import routes as admin_tokens_routes
from app.modules.checkout import routes as checkout_routes
from app.modules.notifications import routes as notifications_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
FUNCTIONS_PREFIX = "/functions/v1"


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


def create_app(app_settings: Settings = settings) -> FastAPI:
    limiter = Limiter(key_func=get_remote_address, default_limits=[app_settings.rate_limit])
    app = FastAPI(
        title=app_settings.app_name,
        debug=app_settings.debug,
        redirect_slashes=False,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    register_error_handlers(app)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        if app_settings.is_production:
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins_list(),
        allow_credentials="*" not in app_settings.get_cors_origins_list(),
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # Storefront data
    app.include_router(auth_routes.router, prefix=API_PREFIX)
    app.include_router(profiles_routes.router, prefix=API_PREFIX)
    app.include_router(products_routes.router, prefix=API_PREFIX)
    app.include_router(reviews_routes.router, prefix=API_PREFIX)
    app.include_router(cart_routes.router, prefix=API_PREFIX)
    app.include_router(push_subscriptions_routes.router, prefix=API_PREFIX)
    app.include_router(admin_tokens_routes.router, prefix=API_PREFIX)

    # Notification handlers
    app.include_router(checkout_routes.router, prefix=FUNCTIONS_PREFIX)
    app.include_router(notifications_routes.router, prefix=FUNCTIONS_PREFIX)
    if app_settings.enable_legacy_endpoints:
        logger.warning("Legacy unauthenticated notification endpoints are enabled")
        app.include_router(checkout_routes.legacy_router, prefix=FUNCTIONS_PREFIX)
        app.include_router(notifications_routes.legacy_router, prefix=FUNCTIONS_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown")

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {app_settings.app_name}", "status": "healthy"}

    @app.get("/health")
    @limiter.exempt
    async def health():
        return {"status": "healthy"}

    @app.get("/ready")
    @limiter.exempt
    async def ready():
        """Readiness probe: extend here with Supabase checks if needed."""
        return {"status": "ready"}

    return app


app = create_app()
