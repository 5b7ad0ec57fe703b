"""Observability configuration using Logfire.

Every domain service opens a Logfire span per operation and logs what it
discarded at debug level (unauthorized status claims, orphaned replies,
broken reply cycles), so a surprising thread or status can be traced back
to the candidate events that produced it.

Usage:
    import logfire

    logfire.info("Thread assembled", root=root_id, comment_count=n)

    with logfire.span("tree_service.build_tree", root=root_id):
        ...
"""

import logfire

from threadline.config import Settings
from threadline.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Sets up Logfire with environment-specific configuration:
    - Development: Local-only (unless token provided), rich console output
    - Production: Cloud sending (if token provided), minimal console

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN environment variable to enable cloud sending
    - If token is present, logs will be sent to Logfire cloud by default
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If cloud sending is forced on without a token
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    if send_to_logfire and not settings.observability.logfire_token:
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE", "requires OBSERVABILITY__LOGFIRE_TOKEN"
        )

    config_kwargs = {
        "service_name": "threadline",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
            min_log_level="debug" if settings.debug else "info",
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )
