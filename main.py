"""
Main entrypoint: FastAPI user management server under uvicorn.

Env: API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT, USER_ID_BASE,
REJECT_NOOP_UPDATE, PUBLIC_PATH_PREFIXES (see user_management.config).

Equivalent: uvicorn user_management.api_server.app:app --host 0.0.0.0 --port 8000
"""

from user_management.config import get_settings
from user_management.logging import configure_structlog, get_logger


def main() -> None:
    """Configure logging from settings, then run the API in the main thread."""
    settings = get_settings()
    # Configure structured logging before other imports that may log
    configure_structlog(level=settings.log_level, fmt=settings.log_format)
    logger = get_logger("main")

    from user_management.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
