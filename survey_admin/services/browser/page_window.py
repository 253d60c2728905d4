"""Bounded page-navigation window for paginated listings."""

from __future__ import annotations

from typing import List, Tuple

from survey_admin.models.browser import MarkerKind, PageMarker

DEFAULT_WINDOW_SIZE = 5


def _page(number: int, current_page: int) -> PageMarker:
    return PageMarker(kind=MarkerKind.PAGE, page=number, is_current=number == current_page)


def compute_window(
    current_page: int,
    total_pages: int,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> Tuple[PageMarker, ...]:
    """
    Compute the markers to render around ``current_page``.

    A block of ``window_size`` consecutive pages is centered on the current
    page and clamped to ``[1, total_pages]``. Page 1 and the last page are
    pinned outside the block, separated from it by an ellipsis when pages
    are skipped.

    >>> [m.page for m in compute_window(10, 20, 5)]
    [1, None, 8, 9, 10, 11, 12, None, 20]
    """
    if window_size < 1:
        raise ValueError("window_size must be at least 1")
    if total_pages <= 0:
        return ()

    start = max(1, current_page - window_size // 2)
    end = min(total_pages, start + window_size - 1)
    if end - start + 1 < window_size:
        start = max(1, end - window_size + 1)

    markers: List[PageMarker] = []
    if start > 1:
        markers.append(_page(1, current_page))
        if start > 2:
            markers.append(PageMarker(kind=MarkerKind.ELLIPSIS))

    markers.extend(_page(number, current_page) for number in range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            markers.append(PageMarker(kind=MarkerKind.ELLIPSIS))
        markers.append(_page(total_pages, current_page))

    return tuple(markers)


__all__ = ["DEFAULT_WINDOW_SIZE", "compute_window"]
