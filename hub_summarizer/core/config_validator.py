"""
Configuration validation for Hub Summarizer.
Validates URL settings, the extraction service and timeouts before the watcher starts.
"""
import logging
import string
from typing import List, Dict, Any
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""
    pass


class ConfigValidator:
    """Validates system configuration before navigation handling starts."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self, check_service: bool = True) -> Dict[str, Any]:
        """
        Run all validation checks.

        Args:
            check_service: Also check the extraction service over the network

        Returns:
            {
                "valid": bool,
                "errors": List[str],
                "warnings": List[str]
            }
        """
        self.errors = []
        self.warnings = []

        self._validate_base_url()
        self._validate_download_template()
        self._validate_segment_settings()
        self._validate_timeout()
        if check_service:
            self._validate_extraction_service()

        return {
            "valid": len(self.errors) == 0,
            "errors": self.errors,
            "warnings": self.warnings
        }

    def ensure_valid(self, check_service: bool = True) -> Dict[str, Any]:
        """Run validation, log warnings, and raise ConfigurationError on errors."""
        result = self.validate_all(check_service=check_service)

        for warning in result["warnings"]:
            logger.warning(f"Configuration warning: {warning}")

        if not result["valid"]:
            for error in result["errors"]:
                logger.error(f"Configuration error: {error}")
            raise ConfigurationError("; ".join(result["errors"]))

        return result

    def _validate_base_url(self):
        """Check that the LMS base URL is absolute and ends with a slash."""
        from hub_summarizer.core.config import LMS_BASE_URL

        parsed = urlparse(LMS_BASE_URL)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            self.errors.append(f"LMS_BASE_URL must be an absolute http(s) URL, got: {LMS_BASE_URL}")
        elif not LMS_BASE_URL.endswith("/"):
            self.warnings.append(
                f"LMS_BASE_URL ({LMS_BASE_URL}) has no trailing slash. "
                "Path segment counting may include a partial segment."
            )

    def _validate_download_template(self):
        """Check that the download template has exactly the expected placeholders."""
        from hub_summarizer.core.config import DOWNLOAD_URL_TEMPLATE

        try:
            fields = {
                name for _, name, _, _ in string.Formatter().parse(DOWNLOAD_URL_TEMPLATE)
                if name
            }
        except ValueError as e:
            self.errors.append(f"DOWNLOAD_URL_TEMPLATE is malformed: {e}")
            return

        expected = {"course_id", "resource_id"}
        if fields != expected:
            self.errors.append(
                f"DOWNLOAD_URL_TEMPLATE must use placeholders {sorted(expected)}, "
                f"found {sorted(fields)}"
            )

    def _validate_segment_settings(self):
        """Validate segment indices and accepted path lengths."""
        from hub_summarizer.core.config import (
            VALID_PATH_LENGTHS,
            COURSE_ID_SEGMENT_INDEX,
            RESOURCE_ID_SEGMENT_INDEX,
        )

        if not VALID_PATH_LENGTHS:
            self.errors.append("VALID_PATH_LENGTHS must list at least one segment count")
        elif any(length <= 0 for length in VALID_PATH_LENGTHS):
            self.errors.append(f"VALID_PATH_LENGTHS ({VALID_PATH_LENGTHS}) must be positive")

        if COURSE_ID_SEGMENT_INDEX < 0 or RESOURCE_ID_SEGMENT_INDEX < 0:
            self.errors.append("Segment indices must not be negative")
        elif COURSE_ID_SEGMENT_INDEX == RESOURCE_ID_SEGMENT_INDEX:
            self.errors.append(
                f"COURSE_ID_SEGMENT_INDEX and RESOURCE_ID_SEGMENT_INDEX are both {COURSE_ID_SEGMENT_INDEX}"
            )

    def _validate_timeout(self):
        """Validate the extraction timeout."""
        from hub_summarizer.core.config import EXTRACTION_TIMEOUT_SEC

        if EXTRACTION_TIMEOUT_SEC <= 0:
            self.errors.append(f"EXTRACTION_TIMEOUT_SEC ({EXTRACTION_TIMEOUT_SEC}) must be > 0")

    def _validate_extraction_service(self):
        """Check that the extraction service host is reachable."""
        from hub_summarizer.core.config import EXTRACTION_SERVICE_URL

        # The endpoint only accepts POST; any HTTP answer means the service is up
        try:
            requests.get(EXTRACTION_SERVICE_URL, timeout=5)
        except requests.exceptions.ConnectionError:
            self.warnings.append(
                f"Cannot connect to extraction service at {EXTRACTION_SERVICE_URL}. "
                "Summaries will fail until it is running."
            )
        except requests.exceptions.Timeout:
            self.warnings.append(f"Extraction service timeout at {EXTRACTION_SERVICE_URL}.")
        except requests.exceptions.RequestException as e:
            self.warnings.append(f"Extraction service check failed: {e}")


# Global validator instance
config_validator = ConfigValidator()
