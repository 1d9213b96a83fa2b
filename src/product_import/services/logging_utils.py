"""Service layer logging utilities.

Provides structured logging functions for import operations, so every batch
is logged with the same format and context.

Usage:
    from product_import.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="store_simple_products",
        outcome="success",
        inserted=12,
        updated=3,
    )
"""

import logging
from typing import Any


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance with the 'product_import.services' prefix.

    Example:
        >>> logger = get_service_logger("product_import.services.entity_writer")
        >>> logger.name
        'product_import.services.entity_writer'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"product_import.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "store_simple_products")
        outcome: Outcome description (e.g., "success", "dry_run", "rolled_back")
        level: Log level (default: INFO). Use DEBUG for per-statement logs.
        **context: Additional context fields (counts, table names, error details)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
