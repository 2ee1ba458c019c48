"""
Cursor-Following Pagination Module.

Turns a single-page listing operation into the complete ordered sequence of
items by following the next-page cursor until the listing is exhausted.
"""

from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

# A page fetcher takes (cursor, page_size) and returns (items, next_cursor)
PageFetcher = Callable[[Optional[Any], int], Tuple[List[T], Optional[Any]]]

DEFAULT_PAGE_SIZE = 100


def iterate_pages(
    fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE
) -> Iterator[T]:
    """
    Yield items page by page, in listing order.

    The first call passes a ``None`` cursor. Iteration ends when the fetcher
    returns no next cursor. Errors raised by the fetcher propagate to the
    caller unchanged.

    Args:
        fetch_page (PageFetcher): Single-page listing operation
        page_size (int): Upper bound of items per page

    Yields:
        T: Items in the order the listing returns them
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    cursor = None
    while True:
        items, cursor = fetch_page(cursor, page_size)
        yield from items
        if cursor is None:
            return


def paginate(fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE) -> List[T]:
    """
    Fetch every page and return the complete list of items.

    A failure on any page aborts the whole pagination; partial results are
    never returned.

    Args:
        fetch_page (PageFetcher): Single-page listing operation
        page_size (int): Upper bound of items per page

    Returns:
        List[T]: All items in listing order
    """
    return list(iterate_pages(fetch_page, page_size))
