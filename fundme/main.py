"""FastAPI application entrypoint for the contract funding page."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response

from fundme import __version__
from fundme.balance.routes import router as balance_router
from fundme.config import Settings, get_settings
from fundme.funding.routes import router as funding_router
from fundme.lib.logger import configure_logging
from fundme.lib.metrics import METRICS
from fundme.notifications.routes import router as notifications_router
from fundme.ui.binding import UiBinding, build_binding
from fundme.ui.routes import router as ui_router
from fundme.wallet.routes import router as wallet_router


def create_app(settings: Settings | None = None, binding: UiBinding | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="Fund Me", version=__version__)
    application.state.settings = settings
    application.state.binding = binding or build_binding(settings)
    application.state.metrics = METRICS

    application.include_router(ui_router, prefix="/ui", tags=["ui"])
    application.include_router(wallet_router, prefix="/wallet", tags=["wallet"])
    application.include_router(balance_router, prefix="/balance", tags=["balance"])
    application.include_router(funding_router, prefix="/funding", tags=["funding"])
    application.include_router(notifications_router, prefix="/notifications", tags=["notifications"])

    @application.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness response for uptime monitoring."""
        payload = {"ok": True, "data": {"status": "healthy"}}
        return JSONResponse(content=payload)

    @application.get("/metrics", tags=["system"], summary="Metrics endpoint")
    async def metrics_endpoint() -> JSONResponse:
        snapshot = METRICS.snapshot()
        return JSONResponse({"ok": True, "data": snapshot})

    @application.get(
        "/.well-known/appspecific/com.chrome.devtools.json",
        include_in_schema=False,
    )
    async def chrome_devtools_discovery() -> Response:
        """Return empty response for Chrome DevTools discovery request to avoid noisy 404 logs."""

        return Response(status_code=204)

    return application


app = create_app()
