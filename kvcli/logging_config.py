import logging
import os
import sys
from typing import IO
from typing import List
from typing import Optional
from typing import Protocol

from loki_logger_handler.loki_logger_handler import LokiLoggerHandler


class LoggingConfig(Protocol):
    log_level: str
    loki_enabled: bool
    loki_url: str
    environment: str


def setup_loki_logging(
    config: LoggingConfig,
    service_name: str,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Configure logging with an optional Loki handler.

    Args:
        config: Application configuration
        service_name: Name of the service, used as the Loki "service" label and logger name
        stream: Stream for the console handler (default: stdout)

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]

    if config.loki_enabled and config.loki_url:
        loki_handler = LokiLoggerHandler(
            url=config.loki_url,
            labels={
                "service": service_name,
                "environment": config.environment,
                "host": os.getenv("HOSTNAME", "unknown"),
            },
            timeout=10,
            compressed=True,
        )
        handlers.append(loki_handler)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO; keep it quiet unless debugging
    if log_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(service_name)
