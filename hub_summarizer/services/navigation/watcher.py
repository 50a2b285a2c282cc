"""
Navigation watcher: installs the summary controller on completed LMS resource-page loads.
"""
import logging
from typing import Any, Awaitable, Callable, Optional

from hub_summarizer.core.config import configure_logging
from hub_summarizer.core.config_validator import config_validator
from hub_summarizer.services.locator.resource_locator import (
    classify,
    extract_reference,
    build_download_url,
)

logger = logging.getLogger(__name__)

TabId = Any

STATUS_COMPLETE = "complete"


class InstallationError(Exception):
    """Raised when the host cannot run the controller in a page context."""
    pass


class BrowserHost:
    """Browser capabilities the watcher depends on."""

    def on_installed(self, handler: Callable[[], None]) -> None:
        raise NotImplementedError

    def on_navigation_complete(
        self, handler: Callable[[TabId, Optional[str], str], Awaitable[bool]]
    ) -> None:
        raise NotImplementedError

    def on_tab_activated(self, handler: Callable[[TabId], Awaitable[bool]]) -> None:
        raise NotImplementedError

    async def get_tab_url(self, tab_id: TabId) -> Optional[str]:
        raise NotImplementedError

    async def install_controller(self, tab_id: TabId, download_url: str) -> None:
        """Run the summary controller inside the page context of ``tab_id``."""
        raise NotImplementedError


class NavigationWatcher:
    """Reacts to tab events reported by a BrowserHost."""

    def __init__(self, host: BrowserHost):
        self.host = host

    def start(self, check_service: bool = True) -> None:
        """
        Validate configuration and register tab handlers with the host.

        Raises:
            ConfigurationError: if the static configuration is inconsistent
        """
        configure_logging()
        config_validator.ensure_valid(check_service=check_service)
        self.host.on_installed(self.handle_installed)
        self.host.on_navigation_complete(self.handle_tab_updated)
        self.host.on_tab_activated(self.handle_tab_activated)

    def handle_installed(self) -> None:
        logger.info("Navigation watcher initialized")

    async def handle_tab_updated(self, tab_id: TabId, url: Optional[str], status: str) -> bool:
        """
        Install the controller if ``url`` is a supported resource page.

        Returns:
            True if the host was asked to install the controller

        Raises:
            InstallationError: if the host failed to install it
        """
        if status != STATUS_COMPLETE or not url:
            return False

        logger.debug(f"Tab {tab_id} updated: {url}")

        if not classify(url):
            logger.debug(f"URL doesn't match pattern, skipping: {url}")
            return False

        ref = extract_reference(url)
        if ref is None:
            logger.error(f"Failed to extract IDs from URL: {url}")
            return False

        download_url = build_download_url(ref)

        try:
            await self.host.install_controller(tab_id, download_url)
        except InstallationError as e:
            logger.error(f"Error injecting controller into tab {tab_id}: {e}")
            raise
        except Exception as e:
            logger.error(f"Error injecting controller into tab {tab_id}: {e}")
            raise InstallationError(str(e)) from e

        logger.info(f"Controller injected into tab {tab_id} (course {ref.course_id}, resource {ref.resource_id})")
        return True

    async def handle_tab_activated(self, tab_id: TabId) -> bool:
        """Report whether the newly active tab is a supported resource page."""
        try:
            url = await self.host.get_tab_url(tab_id)
        except Exception as e:
            logger.error(f"Error checking activated tab {tab_id}: {e}")
            return False

        if url and classify(url):
            logger.info(f"Activated tab matches pattern: {url}")
            return True
        return False
