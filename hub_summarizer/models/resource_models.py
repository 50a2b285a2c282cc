"""
Data models for LMS resources, extraction results and controller state.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ResourceReference:
    """Identifiers of a downloadable LMS resource (numeric strings)"""
    course_id: str
    resource_id: str


class Surface(Enum):
    """Floating UI surface currently mounted in the page."""
    IDLE = "idle"  # Nothing mounted
    BUTTON = "button"  # Summarize button
    POPUP = "popup"  # Summary popup
    MINI_BAR = "mini_bar"  # Minimized bar


@dataclass
class ControllerState:
    """Per-page UI state owned by the summary controller"""
    minimized: bool = False
    expanded: bool = False
    has_summarized: bool = False
    summary_text: str = ""
    loading: bool = False
    error: Optional[str] = None  # Message of the last failed extraction


@dataclass
class Download:
    """Client-side file produced by the page"""
    filename: str
    content: bytes
    mime_type: str

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class ExtractionResponse(BaseModel):
    """JSON body returned by the text extraction service."""
    model_config = ConfigDict(extra="allow")

    text: str = Field(..., description="Text extracted from the uploaded document")
