import pytest

from scripts.extractors.results import PollResult, ResultStore

from html_pages import CANDIDATES, district_page


@pytest.fixture
def page():
    return district_page(CANDIDATES, [
        ("A", ["365", "467", "684"]),
        ("001", ["084", "053", "114"]),
        ("002", ["50", "50", "10"]),
        ("003", ["0", "0", "0"]),
    ])


@pytest.fixture
def store():
    """Two reporting districts plus the delayed district 9."""
    store = ResultStore()
    store.add_district(1, [
        PollResult(1, "A", {"Green": 365, "Liberal": 467, "PC": 684}),
        PollResult(1, 1, {"Green": 84, "Liberal": 53, "PC": 114}),
        PollResult(1, 2, {"Liberal": 50, "PC": 50, "Green": 10}),
        PollResult(1, 3, {"Green": 0, "Liberal": 0, "PC": 0}),
    ])
    store.add_district(2, [
        PollResult(2, 1, {"NDP": 12, "Green": 40, "Liberal": 33, "PC": 39}),
    ])
    store.add_district(9, [
        PollResult(9, "A", {"Green": 400, "Liberal": 10, "PC": 3}),
    ])
    return store
