"""Run the API with uvicorn: ``python -m saas_backend``.

uvicorn owns SIGINT/SIGTERM handling: it stops accepting connections, lets
in-flight requests finish, then runs the app's lifespan shutdown.
"""

import sys

import structlog
import uvicorn

from saas_backend.exceptions import ConfigError

logger = structlog.get_logger(__name__)


def main() -> int:
    try:
        # both modules validate the environment at import time
        from saas_backend.config import load_settings
        from saas_backend.logging import load_logging_settings

        load_logging_settings()
        settings = load_settings()
    except ConfigError as exc:
        logger.error("config_error", code=exc.code, error=exc.message)
        return 1

    logger.info("server_starting", address=f"http://{settings.server_addr}")
    uvicorn.run(
        "saas_backend.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
