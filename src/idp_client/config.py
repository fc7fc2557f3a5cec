"""Client configuration and logging setup."""

import json
import logging
import pathlib

import pydantic
import structlog

from .client import DEFAULT_TIMEOUT, Client
from .metrics import ClientMetrics

logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for an identity provider API client."""

    api_token: pydantic.SecretStr = pydantic.Field(
        description="Static API token sent with the SSWS scheme",
    )
    organization: str = pydantic.Field(
        description="Organization identifier used to build the API origin",
        min_length=1,
    )
    user_agent: str | None = pydantic.Field(None, description="User-Agent header value")
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field(
        "INFO",
        description="Logging level for the application's configure_logging call",
    )


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output.

    Replaces the process-wide structlog configuration, so it is meant for
    the embedding application's entry point, never for library code.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str | pathlib.Path) -> ClientConfig:
    """Load configuration from JSON file."""
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig(**data)


def create_client(
    config: ClientConfig,
    metrics: ClientMetrics | None = None,
) -> Client:
    """Construct a Client from validated config.

    Logging is left untouched; applications that want the logfmt setup call
    ``configure_logging(config.log_level)`` themselves.
    """
    client = Client(
        api_token=config.api_token.get_secret_value(),
        organization=config.organization,
        user_agent=config.user_agent,
        metrics=metrics,
        timeout=config.timeout,
    )
    logger.info("Created API client", base_url=str(client.base_url))
    return client
