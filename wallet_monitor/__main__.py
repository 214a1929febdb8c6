"""Command-line entry point for the wallet monitor server."""

import argparse

import uvicorn

from wallet_monitor.config import get_settings
from wallet_monitor.logging_config import configure_logging


def main() -> None:
    """Run the wallet monitor HTTP server."""
    settings = get_settings()
    
    parser = argparse.ArgumentParser(description="Multi-chain wallet monitor")
    parser.add_argument("--host", default=settings.server.host, help="Bind host")
    parser.add_argument("--port", type=int, default=settings.server.port, help="Bind port")
    parser.add_argument("--reload", action="store_true", default=settings.server.debug,
                        help="Reload on code changes")
    args = parser.parse_args()
    
    configure_logging(settings.server.log_level)
    uvicorn.run(
        "wallet_monitor.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.server.log_level.lower(),
        reload=args.reload
    )


if __name__ == "__main__":
    main()
