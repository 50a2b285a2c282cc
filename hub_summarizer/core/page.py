"""
Page context: the document tree, window globals and event wiring a controller runs against.

The document is a BeautifulSoup tree so that mounts and unmounts are real
tree mutations. Listeners are registered per element id; removing an element
drops the listeners of the element and of every descendant with an id.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from hub_summarizer.models.resource_models import Download

logger = logging.getLogger(__name__)

BLANK_DOCUMENT = "<html><head></head><body></body></html>"


def parse_style(tag: Tag) -> Dict[str, str]:
    """Parse an inline ``style`` attribute into an ordered dict."""
    style = {}
    for declaration in tag.get("style", "").split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        style[name.strip()] = value.strip()
    return style


def set_style(tag: Tag, **properties: str) -> None:
    """Update inline style properties (underscores map to dashes)."""
    style = parse_style(tag)
    for name, value in properties.items():
        style[name.replace("_", "-")] = value
    tag["style"] = "; ".join(f"{name}: {value}" for name, value in style.items())


def get_style(tag: Tag, name: str) -> Optional[str]:
    return parse_style(tag).get(name)


class Page:
    """A single page context inside a browser tab."""

    def __init__(self, url: str = "about:blank", html: Optional[str] = None):
        self.url = url
        self.document = BeautifulSoup(html or BLANK_DOCUMENT, "html.parser")
        # Page-scoped globals (the equivalent of ``window.*``)
        self.window: Dict[str, Any] = {}
        self.downloads: List[Download] = []
        self._listeners: Dict[tuple, List[Callable[[], None]]] = {}

        if self.document.head is None or self.document.body is None:
            raise ValueError("Page document must have <head> and <body>")

    @property
    def head(self) -> Tag:
        return self.document.head

    @property
    def body(self) -> Tag:
        return self.document.body

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.document.find(id=element_id)

    def create_fragment(self, html: str) -> Tag:
        """Parse markup with a single root element."""
        fragment = BeautifulSoup(html, "html.parser")
        root = fragment.find(True)
        if root is None:
            raise ValueError("Markup has no root element")
        return root.extract()

    def append_to_body(self, html: str) -> Tag:
        element = self.create_fragment(html)
        self.body.append(element)
        return element

    def append_to_head(self, html: str) -> Tag:
        element = self.create_fragment(html)
        self.head.append(element)
        return element

    def replace_children(self, element: Tag, html: str) -> None:
        """Replace the content of ``element`` with parsed markup."""
        self._forget_listeners(element, include_self=False)
        element.clear()
        fragment = BeautifulSoup(html, "html.parser")
        for child in list(fragment.contents):
            element.append(child.extract())

    def remove_element(self, element_id: str) -> bool:
        """Remove the element with ``element_id``; False if it was not present."""
        element = self.get_element_by_id(element_id)
        if element is None:
            return False
        self._forget_listeners(element)
        element.decompose()
        return True

    def add_event_listener(self, element_id: str, event: str, handler: Callable[[], None]) -> None:
        if self.get_element_by_id(element_id) is None:
            raise LookupError(f"No element with id {element_id!r}")
        self._listeners.setdefault((element_id, event), []).append(handler)

    def dispatch(self, element_id: str, event: str) -> int:
        """
        Fire ``event`` on an element and return the number of handlers run.

        Disabled elements ignore clicks, as in a browser.
        """
        element = self.get_element_by_id(element_id)
        if element is None:
            raise LookupError(f"No element with id {element_id!r}")
        if event == "click" and element.has_attr("disabled"):
            return 0

        handlers = list(self._listeners.get((element_id, event), []))
        for handler in handlers:
            handler()
        return len(handlers)

    def click(self, element_id: str) -> int:
        return self.dispatch(element_id, "click")

    def trigger_download(self, filename: str, content: bytes, mime_type: str) -> Download:
        """Record a client-side file download."""
        download = Download(filename=filename, content=content, mime_type=mime_type)
        self.downloads.append(download)
        logger.info(f"Download triggered: {filename} ({len(content)} bytes)")
        return download

    def _forget_listeners(self, element: Tag, include_self: bool = True) -> None:
        ids = {child["id"] for child in element.find_all(id=True)}
        if include_self and element.get("id"):
            ids.add(element["id"])
        for key in [key for key in self._listeners if key[0] in ids]:
            del self._listeners[key]
