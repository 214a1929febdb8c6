"""
FastAPI application for the wallet monitor.

This module builds the application, wires services during the lifespan and
renders domain errors as JSON.
"""

import datetime
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wallet_monitor import __version__
from wallet_monitor.config import get_settings
from wallet_monitor.container import ServiceContainer, create_services
from wallet_monitor.logging_config import configure_logging, get_logger
from wallet_monitor.routes import wallets
from wallet_monitor.utils.errors import ErrorCode, WalletMonitorError

logger = get_logger(__name__)


async def wallet_monitor_error_handler(request: Request, exc: WalletMonitorError) -> JSONResponse:
    """Render a domain error with its own status code."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} failed: [{exc.code.value}] {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other error as an opaque internal error."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": ErrorCode.UNKNOWN_ERROR.value,
            "message": "Internal server error",
            "details": {},
        },
    )


def create_app(services: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        services: Prebuilt service container; built from settings at startup when omitted
        
    Returns:
        The configured FastAPI application
    """
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = services
        if container is None:
            settings = get_settings()
            configure_logging(settings.server.log_level)
            container = create_services(settings)
        
        app.state.services = container
        await container.start()
        logger.info("Application initialized successfully")
        
        yield
        
        logger.info("Application shutting down...")
        await container.aclose()
        logger.info("Shutdown complete")
    
    app = FastAPI(
        title="Wallet Monitor API",
        description="Multi-chain wallet balances, history, holdings and balance change alerts.",
        version=__version__,
        lifespan=lifespan,
    )
    
    app.add_exception_handler(WalletMonitorError, wallet_monitor_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(wallets.router)
    
    @app.get("/health", tags=["system"])
    async def health_check(request: Request) -> Dict[str, Any]:
        """Report service status and the active network."""
        container: ServiceContainer = request.app.state.services
        return {
            "status": "healthy",
            "version": __version__,
            "network": container.provider.name,
            "environment": container.settings.server.environment,
            "timestamp": datetime.datetime.now().isoformat(),
        }
    
    return app
