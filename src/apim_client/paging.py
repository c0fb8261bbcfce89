"""Paged list helpers.

Remote list calls return one page at a time together with a continuation
token. Callers here always need the full listing before issuing a batch of
concurrent requests, so pages are drained eagerly into a list.
"""

import logging
from typing import Callable, List, Optional, Tuple, TypeVar

T = TypeVar("T")

# A page fetcher takes the continuation token (None for the first page) and
# returns the page items plus the next token, or None after the last page.
ListPage = Callable[[Optional[str]], Tuple[List[T], Optional[str]]]

# Guard against a service that keeps handing back the same continuation token
MAX_PAGES = 10_000

logger = logging.getLogger(__name__)


def drain(list_page: "ListPage[T]") -> List[T]:
    """Fetch every page from ``list_page`` and concatenate the items.

    Args:
        list_page: Page fetcher following the ListPage contract

    Returns:
        All items across all pages, in page order

    Raises:
        RuntimeError: If the fetcher does not terminate within MAX_PAGES
        Any exception raised by ``list_page`` itself
    """
    items: List[T] = []
    token: Optional[str] = None
    for page_number in range(1, MAX_PAGES + 1):
        page, token = list_page(token)
        items.extend(page)
        logger.debug(f"Fetched page {page_number} ({len(page)} items)")
        if token is None:
            return items
    raise RuntimeError(f"Listing did not finish after {MAX_PAGES} pages")
