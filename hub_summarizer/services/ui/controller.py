"""
Page-side summary controller: floating UI state machine and extraction lifecycle.

Surfaces: IDLE -> BUTTON -> POPUP <-> MINI_BAR, and POPUP -> IDLE via close().
At most one of the summarize button, popup and mini-bar is mounted at a time.
Handlers are synchronous; extractions run as asyncio tasks on the page's
event loop. Starting an extraction cancels the previous one, and callbacks
from a superseded generation are dropped.
"""
import asyncio
import logging
from datetime import datetime
from typing import Optional, Set

from hub_summarizer.core.config import STYLESHEETS, SUMMARY_FILENAME, SUMMARY_MIME_TYPE
from hub_summarizer.core.page import Page, set_style
from hub_summarizer.models.resource_models import ControllerState, Surface
from hub_summarizer.services.extraction.extraction_client import (
    ExtractionClient,
    ExtractionError,
    extraction_client,
)
from hub_summarizer.services.ui import markup

logger = logging.getLogger(__name__)

# Page-context markers
INJECTED_FLAG = "hub_summarizer_injected"
CONTROLLER_KEY = "hub_summarizer_controller"

SURFACE_ELEMENT_IDS = {
    Surface.BUTTON: markup.SUMMARIZE_BUTTON_ID,
    Surface.POPUP: markup.POPUP_ID,
    Surface.MINI_BAR: markup.MINI_BAR_ID,
}


class SummaryController:
    """Owns the floating UI of one page context."""

    def __init__(
        self,
        page: Page,
        download_url: str,
        client: Optional[ExtractionClient] = None,
        state: Optional[ControllerState] = None,
    ):
        self.page = page
        self.download_url = download_url
        self.client = client or extraction_client
        self.state = state or ControllerState()
        self.surface = Surface.IDLE

        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._download_pending = False

    def start(self) -> None:
        """Pre-fetch the summary and show the summarize button."""
        self.start_extraction()
        self.show_button()

    # ====== Extraction lifecycle ======

    def start_extraction(self) -> asyncio.Task:
        """Schedule a fresh extraction, superseding any in-flight one."""
        loop = asyncio.get_running_loop()

        if self._task is not None and not self._task.done():
            logger.debug(f"Cancelling superseded extraction (generation {self._generation})")
            self._task.cancel()

        self._generation += 1
        generation = self._generation
        self.state.error = None

        task = loop.create_task(
            self.client.fetch_and_extract(
                self.download_url,
                on_loading_change=lambda loading: self._on_loading_change(generation, loading),
                on_result=lambda text: self._on_result(generation, text),
                on_error=lambda error: self._on_error(generation, error),
            )
        )
        self._task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until no extraction task is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _on_loading_change(self, generation: int, loading: bool) -> None:
        if not self._is_current(generation):
            return
        self.state.loading = loading
        self._render_loading()
        self._render_error()

    def _on_result(self, generation: int, text: str) -> None:
        if not self._is_current(generation):
            logger.debug(f"Discarding result of superseded extraction (generation {generation})")
            return

        self.state.summary_text = text
        self.state.has_summarized = True
        self.state.error = None
        self._render_summary()
        self._render_error()

        if self._download_pending:
            self._download_pending = False
            self._save_summary(text)

    def _on_error(self, generation: int, error: ExtractionError) -> None:
        if not self._is_current(generation):
            return

        self.state.error = str(error)
        if self._download_pending:
            self._download_pending = False
            if self.state.summary_text:
                logger.warning("Extraction failed, downloading the last summary instead")
                self._save_summary(self.state.summary_text)
            else:
                logger.warning("Summary download skipped: extraction failed")
        self._render_error()

    # ====== Surfaces ======

    def _unmount_except(self, keep: Surface) -> None:
        for surface, element_id in SURFACE_ELEMENT_IDS.items():
            if surface is not keep:
                self.page.remove_element(element_id)

    def _load_stylesheets(self) -> None:
        for element_id, href in STYLESHEETS.items():
            if self.page.get_element_by_id(element_id) is None:
                self.page.append_to_head(markup.stylesheet_link(element_id, href))

    def show_button(self) -> bool:
        """Mount the summarize button unless a summary is already shown."""
        if self.state.has_summarized or self.page.get_element_by_id(markup.SUMMARIZE_BUTTON_ID) is not None:
            return False

        self._unmount_except(Surface.BUTTON)
        self._load_stylesheets()
        self.page.append_to_body(markup.summarize_button())
        self.page.add_event_listener(markup.SUMMARIZE_BUTTON_ID, "click", self.open_popup)
        self.surface = Surface.BUTTON
        self._render_loading()
        return True

    def open_popup(self) -> None:
        """Show the summary popup in place of the button or mini-bar."""
        self._unmount_except(Surface.POPUP)

        if self.page.get_element_by_id(markup.POPUP_ID) is None:
            self._load_stylesheets()
            self.page.append_to_body(markup.popup())
            self.page.add_event_listener(markup.MINIMIZE_BUTTON_ID, "click", self.minimize)
            self.page.add_event_listener(markup.RELOAD_BUTTON_ID, "click", self.reload)
            self.page.add_event_listener(markup.DOWNLOAD_BUTTON_ID, "click", self.download)
            self._render_summary()
            self._render_loading()
            self._render_error()

        self.state.expanded = True
        self.state.minimized = False
        self.surface = Surface.POPUP

    def minimize(self) -> None:
        """Collapse the popup into the mini-bar."""
        self.page.remove_element(markup.POPUP_ID)
        self.state.has_summarized = False
        self.state.minimized = True
        self.state.expanded = False
        self._mount_mini_bar()

    def _mount_mini_bar(self) -> None:
        self.page.remove_element(markup.MINI_BAR_ID)
        self._unmount_except(Surface.MINI_BAR)

        self.page.append_to_body(markup.mini_bar())
        self.page.add_event_listener(markup.MINI_SUMMARIZE_BUTTON_ID, "click", self.summarize_again)
        self.page.add_event_listener(markup.MINI_EXPAND_BUTTON_ID, "click", self.expand)
        self.surface = Surface.MINI_BAR
        self._render_loading()

    def expand(self) -> None:
        self.page.remove_element(markup.MINI_BAR_ID)
        self.open_popup()

    def summarize_again(self) -> None:
        """Expand the popup and re-run the extraction."""
        self.state.has_summarized = True
        self.expand()
        self.start_extraction()

    def close(self) -> None:
        """Dismiss the popup without minimizing."""
        self.page.remove_element(markup.POPUP_ID)
        self.state.has_summarized = False
        self.state.expanded = False
        self.surface = Surface.IDLE

    # ====== Popup actions ======

    def reload(self) -> None:
        """Replace the popup content with a timestamped placeholder (no refetch)."""
        content = self.page.get_element_by_id(markup.POPUP_CONTENT_ID)
        if content is None:
            return
        time_label = datetime.now().strftime("%H:%M:%S")
        self.page.replace_children(content, markup.reload_placeholder(time_label))

    def download(self) -> None:
        """Re-run the extraction and save its text as a file once it arrives."""
        self._download_pending = True
        self.start_extraction()

    def _save_summary(self, text: str) -> None:
        self.page.trigger_download(SUMMARY_FILENAME, text.encode("utf-8"), SUMMARY_MIME_TYPE)

    # ====== Rendering ======

    def _render_loading(self) -> None:
        loading = self.state.loading

        # The main button stays clickable so the popup can show progress
        button = self.page.get_element_by_id(markup.SUMMARIZE_BUTTON_ID)
        if button is not None:
            self._render_control_spinner(markup.SUMMARIZE_SPINNER_ID, markup.SUMMARIZE_LABEL_ID, loading)

        mini_button = self.page.get_element_by_id(markup.MINI_SUMMARIZE_BUTTON_ID)
        if mini_button is not None:
            if loading:
                mini_button["disabled"] = ""
            else:
                mini_button.attrs.pop("disabled", None)
            self._render_control_spinner(markup.MINI_SUMMARIZE_SPINNER_ID, markup.MINI_SUMMARIZE_LABEL_ID, loading)

        popup_spinner = self.page.get_element_by_id(markup.POPUP_SPINNER_ID)
        if popup_spinner is not None:
            set_style(popup_spinner, display="block" if loading else "none")

    def _render_control_spinner(self, spinner_id: str, label_id: str, loading: bool) -> None:
        spinner = self.page.get_element_by_id(spinner_id)
        if spinner is not None:
            set_style(spinner, display="inline-block" if loading else "none")
        label = self.page.get_element_by_id(label_id)
        if label is not None:
            set_style(label, opacity="0.6" if loading else "1")

    def _render_summary(self) -> None:
        element = self.page.get_element_by_id(markup.SUMMARY_TEXT_ID)
        if element is not None:
            element.string = self.state.summary_text

    def _render_error(self) -> None:
        element = self.page.get_element_by_id(markup.POPUP_ERROR_ID)
        if element is None:
            return
        if self.state.error and not self.state.loading:
            element.string = f"Could not summarize this document: {self.state.error}"
            set_style(element, display="block")
        else:
            element.string = ""
            set_style(element, display="none")


def get_controller(page: Page) -> Optional[SummaryController]:
    return page.window.get(CONTROLLER_KEY)


def install(
    page: Page,
    download_url: str,
    client: Optional[ExtractionClient] = None,
) -> Optional[SummaryController]:
    """
    Install the summary controller into a page context.

    Must run inside the page's event loop. A page that already carries the
    injection marker is left untouched and None is returned.
    """
    if page.window.get(INJECTED_FLAG):
        logger.info("Hub Summarizer already injected, skipping")
        return None

    controller = SummaryController(page, download_url, client=client)
    controller.start()

    page.window[INJECTED_FLAG] = True
    page.window[CONTROLLER_KEY] = controller
    logger.info(f"Summary controller installed for {download_url}")
    return controller
