"""
Resource locator: recognizes LMS content-viewer URLs and derives direct-download links.

Classification and identifier extraction look at the same URL shape through
different lenses. ``classify`` is a cheap prefix and segment-count check on the
part of the URL after the base. ``extract_reference`` parses the URL and reads
identifiers at fixed positions of the full path. A URL can pass the first and
still fail the second, so callers must check both.
"""
import logging
import re
from typing import List, Optional
from urllib.parse import urlparse

from hub_summarizer.core.config import (
    LMS_BASE_URL,
    VALID_PATH_LENGTHS,
    COURSE_ID_SEGMENT_INDEX,
    RESOURCE_ID_SEGMENT_INDEX,
    DOWNLOAD_URL_TEMPLATE,
)
from hub_summarizer.models.resource_models import ResourceReference

logger = logging.getLogger(__name__)

_NUMERIC_ID = re.compile(r"[0-9]+")


def extract_path_segments(url: str, base_url: str = LMS_BASE_URL) -> List[str]:
    """Split the part of ``url`` after ``base_url`` into non-empty segments."""
    path_after_base = url[len(base_url):]
    clean_path = path_after_base[:-1] if path_after_base.endswith("/") else path_after_base
    return [segment for segment in clean_path.split("/") if segment]


def classify(url: Optional[str], base_url: str = LMS_BASE_URL) -> bool:
    """Return True if ``url`` looks like a resource page in the content viewer."""
    if not url or not isinstance(url, str) or not url.startswith(base_url):
        return False

    return len(extract_path_segments(url, base_url)) in VALID_PATH_LENGTHS


def is_valid_id(value: Optional[str]) -> bool:
    """Check that an identifier candidate is a non-empty string of ASCII digits."""
    return bool(value) and _NUMERIC_ID.fullmatch(value) is not None


def extract_reference(url: Optional[str]) -> Optional[ResourceReference]:
    """
    Read course and resource identifiers from the URL path.

    Returns:
        ResourceReference, or None when the URL does not parse or either
        identifier is missing or non-numeric
    """
    if not url or not isinstance(url, str):
        return None

    try:
        parsed = urlparse(url)
    except ValueError as e:
        logger.error(f"Error parsing URL {url!r}: {e}")
        return None

    if not parsed.scheme or not parsed.netloc:
        logger.error(f"Error parsing URL {url!r}: not an absolute URL")
        return None

    segments = [segment for segment in parsed.path.split("/") if segment]

    course_id = segments[COURSE_ID_SEGMENT_INDEX] if len(segments) > COURSE_ID_SEGMENT_INDEX else None
    resource_id = segments[RESOURCE_ID_SEGMENT_INDEX] if len(segments) > RESOURCE_ID_SEGMENT_INDEX else None

    if not is_valid_id(course_id) or not is_valid_id(resource_id):
        logger.warning(f"Invalid IDs extracted: course_id={course_id!r}, resource_id={resource_id!r}")
        return None

    return ResourceReference(course_id=course_id, resource_id=resource_id)


def build_download_url(ref: ResourceReference) -> str:
    """Direct-download URL for a resource."""
    return DOWNLOAD_URL_TEMPLATE.format(course_id=ref.course_id, resource_id=ref.resource_id)
