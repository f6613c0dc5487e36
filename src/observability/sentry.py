"""Sentry error reporting for report runs."""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

SERVICE_NAME = "notion-insights"


def init_sentry(command: str | None = None) -> bool:
    """Start Sentry when SENTRY_DSN is configured.

    Logged errors become Sentry events and INFO and above are kept as
    breadcrumbs, so a failed Notion fetch arrives with the requests that led up
    to it.

    :param command: Report being run, attached as a tag.
    :returns: True if Sentry was started, False if no DSN is set.
    """
    dsn = os.environ.get("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        environment=os.environ.get("APP_ENV", "local"),
        server_name=SERVICE_NAME,
        send_default_pii=False,
        traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0")),
    )
    if command:
        sentry_sdk.set_tag("command", command)
    return True
