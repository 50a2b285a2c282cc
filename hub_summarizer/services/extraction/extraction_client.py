"""
Text extraction client: downloads an LMS document and submits it to the local extraction service.
"""
import logging
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from hub_summarizer.core.config import (
    EXTRACTION_SERVICE_URL,
    EXTRACTION_TIMEOUT_SEC,
    UPLOAD_FIELD_NAME,
    UPLOAD_FILENAME,
    UPLOAD_MIME_TYPE,
)
from hub_summarizer.models.resource_models import ExtractionResponse

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a document cannot be downloaded or its text extracted."""
    pass


class ExtractionClient:
    """Two-stage client: GET the source document, POST it to the extraction service."""

    def __init__(
        self,
        service_url: str = EXTRACTION_SERVICE_URL,
        timeout: float = EXTRACTION_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.service_url = service_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def extract_text(self, download_url: str) -> str:
        """
        Download the document at ``download_url`` and return its extracted text.

        Raises:
            ExtractionError: on transport errors, non-2xx responses, timeouts,
                or a response body without a ``text`` field
        """
        async with self._client() as client:
            try:
                document = await client.get(download_url)
                document.raise_for_status()

                files = {UPLOAD_FIELD_NAME: (UPLOAD_FILENAME, document.content, UPLOAD_MIME_TYPE)}
                response = await client.post(self.service_url, files=files)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise ExtractionError(f"Extraction request failed: {e}") from e

        try:
            return ExtractionResponse.model_validate(response.json()).text
        except ValidationError as e:
            raise ExtractionError(f"Extraction service response missing text: {e}") from e
        except ValueError as e:
            raise ExtractionError(f"Extraction service returned non-JSON body: {e}") from e

    async def fetch_and_extract(
        self,
        download_url: str,
        on_loading_change: Callable[[bool], None],
        on_result: Callable[[str], None],
        on_error: Optional[Callable[[ExtractionError], None]] = None,
    ) -> None:
        """
        Run an extraction and report through callbacks.

        Loading is signalled True before any I/O and False before the result
        or error is reported. Failures never propagate; they are logged and
        passed to ``on_error`` when given.
        """
        on_loading_change(True)

        try:
            text = await self.extract_text(download_url)
        except ExtractionError as e:
            logger.error(f"Fetch error for {download_url}: {e}")
            on_loading_change(False)
            if on_error is not None:
                on_error(e)
            return

        on_loading_change(False)
        on_result(text)


# Global extraction client instance
extraction_client = ExtractionClient()
