"""Application startup validation checks.

Validates settings before the application starts so a bad environment fails
at boot rather than on the first lookup.
"""

import logging
import re

from core.settings import Settings, settings

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^https?://.+")


def validate_all_settings(config: Settings = settings) -> None:
    """Validate all critical settings at application startup.

    Raises:
        RuntimeError: If any setting is missing or invalid
    """
    problems = []

    if not _URL_PATTERN.match(config.UPSTREAM_BASE_URL or ""):
        problems.append(
            f"  - UPSTREAM_BASE_URL={config.UPSTREAM_BASE_URL} "
            "(must start with http:// or https://)"
        )

    if not (1 <= config.PORT <= 65535):
        problems.append(f"  - PORT must be 1-65535, got {config.PORT}")

    if config.UPSTREAM_TIMEOUT_SECONDS <= 0:
        problems.append(
            f"  - UPSTREAM_TIMEOUT_SECONDS must be positive, got {config.UPSTREAM_TIMEOUT_SECONDS}"
        )

    if config.UPSTREAM_MAX_REDIRECTS < 0:
        problems.append(
            f"  - UPSTREAM_MAX_REDIRECTS cannot be negative, got {config.UPSTREAM_MAX_REDIRECTS}"
        )

    if not config.CASE_REFERENCE_FIELDS:
        problems.append("  - CASE_REFERENCE_FIELDS must list at least one field name")
    elif any(not field.strip() for field in config.CASE_REFERENCE_FIELDS):
        problems.append(
            f"  - CASE_REFERENCE_FIELDS contains a blank field name: {config.CASE_REFERENCE_FIELDS}"
        )

    if problems:
        error_msg = "Invalid configuration:\n" + "\n".join(problems)
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if not config.UPSTREAM_VERIFY_SSL:
        logger.warning(
            "TLS certificate verification is DISABLED for %s", config.UPSTREAM_BASE_URL
        )

    logger.info("All settings validated successfully")
    logger.info(f"  - Upstream: {config.UPSTREAM_BASE_URL}")
    logger.info(
        f"  - Timeout: {config.UPSTREAM_TIMEOUT_SECONDS}s, redirects: {config.UPSTREAM_MAX_REDIRECTS}"
    )
    logger.info(f"  - Case reference fields: {', '.join(config.CASE_REFERENCE_FIELDS)}")
