"""Service settings loaded from environment variables.

Only the HTTP service reads these; the import functions take their options
as keyword arguments.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigValidationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class ImportSettings:
    """Immutable service configuration.

    Attributes:
        max_upload_bytes: Largest accepted upload.
        strict_coordinates: Reject KML rings with malformed coordinate tokens
            instead of dropping the tokens.
        log_level: Name of the stdlib logging level for the service.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    strict_coordinates: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ImportSettings:
        """Load and validate settings from ``FIELD_IMPORT_*`` variables.

        Raises:
            ConfigValidationError: A value is out of range.
            ValueError: ``FIELD_IMPORT_MAX_UPLOAD_BYTES`` is not an integer.
        """
        settings = cls(
            max_upload_bytes=int(os.getenv("FIELD_IMPORT_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
            strict_coordinates=os.getenv("FIELD_IMPORT_STRICT_COORDINATES", "false").strip().lower()
            in TRUE_VALUES,
            log_level=os.getenv("FIELD_IMPORT_LOG_LEVEL", "INFO").strip().upper(),
        )
        _validate(settings)
        return settings


def _validate(settings: ImportSettings) -> None:
    if settings.max_upload_bytes <= 0:
        raise ConfigValidationError(
            "FIELD_IMPORT_MAX_UPLOAD_BYTES",
            settings.max_upload_bytes,
            "must be > 0 (bytes)",
        )

    if settings.log_level not in LOG_LEVELS:
        raise ConfigValidationError(
            "FIELD_IMPORT_LOG_LEVEL",
            settings.log_level,
            f"must be one of {', '.join(LOG_LEVELS)}",
        )


def configure_logging(level: str) -> None:
    """Set up root logging for the service process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
