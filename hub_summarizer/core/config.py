"""
Configuration management for Hub Summarizer.
Loads configuration from environment variables and .env file.
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in the project root or the package directory
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_ROOT = PACKAGE_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
else:
    package_env = PACKAGE_DIR / ".env"
    if package_env.exists():
        load_dotenv(package_env)

# LMS content viewer
LMS_BASE_URL = "https://learn.bcit.ca/d2l/le/content/"
# Segment counts (after the base) that identify a resource page
VALID_PATH_LENGTHS = (3, 4)
# Positions within the full URL path (not relative to the base)
COURSE_ID_SEGMENT_INDEX = 3
RESOURCE_ID_SEGMENT_INDEX = 5
DOWNLOAD_URL_TEMPLATE = (
    "https://learn.bcit.ca/d2l/le/content/{course_id}/topics/files/download/{resource_id}/DirectFileTopicDownload"
)

# Text extraction service
EXTRACTION_SERVICE_URL = os.getenv("EXTRACTION_SERVICE_URL", "http://localhost:3000/buffer-to-text")
EXTRACTION_TIMEOUT_SEC = float(os.getenv("EXTRACTION_TIMEOUT_SEC", "120"))
UPLOAD_FIELD_NAME = "file"
UPLOAD_FILENAME = os.getenv("UPLOAD_FILENAME", "doc.pdf")
UPLOAD_MIME_TYPE = os.getenv("UPLOAD_MIME_TYPE", "application/pdf")

# Generated artifact
SUMMARY_FILENAME = os.getenv("SUMMARY_FILENAME", "summary.txt")
SUMMARY_MIME_TYPE = "text/plain"

# Page-side UI
STYLESHEETS = {
    "bootstrap-css": "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/css/bootstrap.min.css",
    "bootstrap-icons": "https://cdn.jsdelivr.net/npm/bootstrap-icons@1.11.1/font/bootstrap-icons.css",
}
BUTTON_BOTTOM = os.getenv("BUTTON_BOTTOM", "20px")
BUTTON_RIGHT = os.getenv("BUTTON_RIGHT", "20px")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
