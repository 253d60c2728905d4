import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from survey_admin.models.browser import MarkerKind  # noqa: E402
from survey_admin.services.browser.page_window import compute_window  # noqa: E402


def render(markers):
    return ["..." if m.kind is MarkerKind.ELLIPSIS else m.page for m in markers]


def test_centered_window_with_both_ellipses():
    assert render(compute_window(10, 20, 5)) == [1, "...", 8, 9, 10, 11, 12, "...", 20]


def test_single_page_has_no_ellipsis():
    assert render(compute_window(1, 1, 5)) == [1]


def test_small_total_lists_every_page():
    assert render(compute_window(2, 4, 5)) == [1, 2, 3, 4]
    assert render(compute_window(5, 5, 5)) == [1, 2, 3, 4, 5]


def test_no_pages_yields_empty_window():
    assert compute_window(1, 0, 5) == ()


def test_window_clamped_at_start():
    assert render(compute_window(1, 20, 5)) == [1, 2, 3, 4, 5, "...", 20]
    assert render(compute_window(3, 20, 5)) == [1, 2, 3, 4, 5, "...", 20]


def test_window_clamped_at_end():
    assert render(compute_window(20, 20, 5)) == [1, "...", 16, 17, 18, 19, 20]
    assert render(compute_window(18, 20, 5)) == [1, "...", 16, 17, 18, 19, 20]


def test_adjacent_first_page_skips_ellipsis():
    # block starts at 2, so page 1 is pinned without a gap marker
    assert render(compute_window(4, 20, 5)) == [1, 2, 3, 4, 5, 6, "...", 20]


def test_adjacent_last_page_skips_ellipsis():
    assert render(compute_window(17, 20, 5)) == [1, "...", 15, 16, 17, 18, 19, 20]


def test_current_page_is_flagged():
    markers = compute_window(7, 12, 5)
    current = [m.page for m in markers if m.is_current]
    assert current == [7]


@pytest.mark.parametrize("total_pages", [1, 2, 5, 6, 7, 13, 40])
@pytest.mark.parametrize("window_size", [1, 3, 5, 7])
def test_window_properties_hold_for_every_page(total_pages, window_size):
    for current in range(1, total_pages + 1):
        markers = compute_window(current, total_pages, window_size)
        pages = [m.page for m in markers if m.kind is MarkerKind.PAGE]

        assert current in pages
        assert len(pages) <= window_size + 2
        assert pages == sorted(set(pages))
        assert pages[0] == 1 and pages[-1] == total_pages
        assert markers == compute_window(current, total_pages, window_size)


def test_invalid_window_size_rejected():
    with pytest.raises(ValueError):
        compute_window(1, 10, 0)
