"""
Shared fixtures: a stub LMS + extraction service app and clients wired to it.
"""
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi import FastAPI, File, Response, UploadFile

from hub_summarizer.core.page import Page
from hub_summarizer.services.extraction.extraction_client import ExtractionClient
from hub_summarizer.services.ui import markup

PDF_BYTES = b"%PDF-1.4\n% stub lecture notes\n"

# Four segments after the base; course id and resource id at path positions 3 and 5
RESOURCE_URL = "https://learn.bcit.ca/d2l/le/content/123456/viewContent/7890123/View"
DOWNLOAD_URL = (
    "https://learn.bcit.ca/d2l/le/content/123456/topics/files/download/7890123/DirectFileTopicDownload"
)


def create_stub_app(text: str = "Hello", uploads: Optional[List[Dict[str, Any]]] = None) -> FastAPI:
    """FastAPI app serving both the LMS download route and /buffer-to-text."""
    app = FastAPI(title="Stub LMS and extraction service")

    @app.get("/d2l/le/content/{course_id}/topics/files/download/{resource_id}/DirectFileTopicDownload")
    async def direct_file_download(course_id: str, resource_id: str):
        return Response(content=PDF_BYTES, media_type="application/pdf")

    @app.post("/buffer-to-text")
    async def buffer_to_text(file: UploadFile = File(...)):
        content = await file.read()
        if uploads is not None:
            uploads.append({
                "filename": file.filename,
                "content_type": file.content_type,
                "content": content,
            })
        return {"text": text, "pages": 1}

    return app


def mock_client(handler) -> ExtractionClient:
    """ExtractionClient whose requests are answered by ``handler``."""
    return ExtractionClient(transport=httpx.MockTransport(handler))


def mounted_surfaces(page: Page) -> List[str]:
    """Ids of the floating UI surfaces present in the page."""
    surface_ids = [markup.SUMMARIZE_BUTTON_ID, markup.POPUP_ID, markup.MINI_BAR_ID]
    return [
        element_id
        for element_id in surface_ids
        for _ in page.document.find_all(id=element_id)
    ]


@pytest.fixture
def uploads():
    return []


@pytest.fixture
def stub_client(uploads):
    app = create_stub_app(text="Hello", uploads=uploads)
    return ExtractionClient(transport=httpx.ASGITransport(app=app))


@pytest.fixture
def page():
    return Page(url=RESOURCE_URL)
