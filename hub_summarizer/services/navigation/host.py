"""
In-process browser host: tabs backed by Page objects on the current event loop.
"""
import logging
from typing import Callable, Dict, List, Optional

from hub_summarizer.core.page import Page
from hub_summarizer.services.extraction.extraction_client import ExtractionClient
from hub_summarizer.services.navigation.watcher import (
    BrowserHost,
    InstallationError,
    STATUS_COMPLETE,
    TabId,
)
from hub_summarizer.services.ui.controller import install

logger = logging.getLogger(__name__)


class InProcessHost(BrowserHost):
    """Runs summary controllers directly against in-memory pages."""

    def __init__(self, client: Optional[ExtractionClient] = None):
        self.client = client
        self.tabs: Dict[TabId, Page] = {}
        self._installed_handlers: List[Callable] = []
        self._navigation_handlers: List[Callable] = []
        self._activation_handlers: List[Callable] = []

    def on_installed(self, handler):
        self._installed_handlers.append(handler)

    def on_navigation_complete(self, handler):
        self._navigation_handlers.append(handler)

    def on_tab_activated(self, handler):
        self._activation_handlers.append(handler)

    def fire_installed(self) -> None:
        for handler in self._installed_handlers:
            handler()

    async def navigate(self, tab_id: TabId, url: str, new_document: bool = False) -> Page:
        """
        Load ``url`` in a tab and report the completed navigation.

        The tab keeps its page context (in-app navigation) unless it is new
        or ``new_document`` is set.
        """
        page = self.tabs.get(tab_id)
        if page is None or new_document:
            page = Page(url=url)
            self.tabs[tab_id] = page
        else:
            page.url = url

        await self.dispatch_navigation(tab_id, url, STATUS_COMPLETE)
        return page

    async def dispatch_navigation(self, tab_id: TabId, url: Optional[str], status: str) -> None:
        for handler in self._navigation_handlers:
            try:
                await handler(tab_id, url, status)
            except InstallationError as e:
                logger.warning(f"Navigation handler failed for tab {tab_id}: {e}")

    async def activate(self, tab_id: TabId) -> None:
        for handler in self._activation_handlers:
            await handler(tab_id)

    async def get_tab_url(self, tab_id: TabId) -> Optional[str]:
        page = self.tabs.get(tab_id)
        if page is None:
            raise LookupError(f"No tab with id {tab_id!r}")
        return page.url

    async def install_controller(self, tab_id: TabId, download_url: str) -> None:
        page = self.tabs.get(tab_id)
        if page is None:
            raise InstallationError(f"No tab with id {tab_id!r}")
        install(page, download_url, client=self.client)
