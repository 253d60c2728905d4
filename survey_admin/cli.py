"""
Survey Admin CLI
Command-line interface for starting the admin console
"""

import argparse
import uvicorn
import logging

from survey_admin.config.settings import configure_logging, settings

logger = logging.getLogger(__name__)


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Survey Admin Console - session-gated survey browser")
    parser.add_argument("--host", default=settings.HOST, help=f"Host to bind (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Port to bind (default: {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"], help="Log level")

    args = parser.parse_args()

    configure_logging(args.log_level)
    logger.info(f"Starting survey admin console on {args.host}:{args.port}")

    uvicorn.run(
        "survey_admin.app_factory:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level
    )


if __name__ == "__main__":
    main()
