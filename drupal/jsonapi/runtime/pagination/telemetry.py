"""Structured logging for pagination operations.

This module provides telemetry hooks for page fetches and consume runs,
emitting structured logs with a short event name and flat ``extra`` fields.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    url: str,
    resources: int,
    next_link: str | None,
    page_index: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page fetch.

    Args:
        url: URL of the fetched page
        resources: Number of resources the page contributed
        next_link: URL of the following page, if any
        page_index: Zero-based index of the page within its sequence
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "url": url,
            "resources": resources,
            "next_link": next_link,
            "page_index": page_index,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    url: str,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch.

    Args:
        url: URL of the page that failed
        error_type: Type of error (e.g., "TransportError", "DocumentError")
        error_message: Error message
    """
    logger.error(
        "page_fetch_error",
        extra={
            "url": url,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_visitor_error(*, error_type: str, error_message: str) -> None:
    """Log a visitor failure collected before consume returns or re-raises."""
    logger.error(
        "visitor_error",
        extra={"error_type": error_type, "error_message": error_message},
    )


def log_consume_complete(
    *,
    delivered: int,
    preserve_order: bool,
    can_continue: bool,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a consume run.

    Args:
        delivered: Number of resources handed to the visitor
        preserve_order: Whether visitor calls were serialized
        can_continue: Whether more resources may be requested via add_more
        total_latency_ms: Total latency in milliseconds (optional)
    """
    logger.info(
        "consume_complete",
        extra={
            "delivered": delivered,
            "preserve_order": preserve_order,
            "can_continue": can_continue,
            "total_latency_ms": total_latency_ms,
        },
    )
