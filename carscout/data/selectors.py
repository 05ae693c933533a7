from typing import Callable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag
import structlog

logger = structlog.get_logger()

# A strategy maps a parsed document to the listing fragments it recognises.
ListingStrategy = Callable[[BeautifulSoup], List[Tag]]


def css_strategy(selector: str) -> ListingStrategy:
    def locate(soup: BeautifulSoup) -> List[Tag]:
        return soup.select(selector)

    locate.__name__ = f"css[{selector}]"
    return locate


def anchor_strategy(path_fragment: str) -> ListingStrategy:
    """Generic last resort: links pointing into the source's listing path."""

    def locate(soup: BeautifulSoup) -> List[Tag]:
        anchors = []
        for anchor in soup.find_all("a", href=True):
            href = anchor["href"]
            if path_fragment in href and not href.strip().lower().startswith("javascript:"):
                anchors.append(anchor)
        return anchors

    locate.__name__ = f"anchor[{path_fragment}]"
    return locate


def locate_fragments(soup: BeautifulSoup, strategies: Sequence[ListingStrategy]) -> Tuple[List[Tag], Optional[str]]:
    for strategy in strategies:
        fragments = strategy(soup)
        if fragments:
            return fragments, strategy.__name__
    return [], None


def first_text(node: Tag, selectors: Sequence[str]) -> str:
    for selector in selectors:
        match = node.select_one(selector)
        if match is None:
            continue
        text = match.get_text(" ", strip=True)
        if text:
            return text
    return ""


def first_attribute(node: Optional[Tag], attributes: Sequence[str]) -> Optional[str]:
    if node is None:
        return None
    for attribute in attributes:
        value = node.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        if value and value.strip():
            return value.strip()
    return None
