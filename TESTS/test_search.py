import pytest

from catalog.models import ClassifiedEntry, MainCategory
from catalog.search import search


def entry(title, group, category=MainCategory.TV):
    return ClassifiedEntry(
        title=title, url="http://x/s", group_title=group, logo_url=None, main_category=category, sub_category=group
    )


ENTRIES = [
    entry("NEWS HD", "Haber"),
    entry("Spor 1", "Spor"),
    entry("Film A", "FILM", MainCategory.MOVIES),
    entry("NEWS HD", "Yedek"),
    entry("Yerel", "World News"),
]


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_means_inactive(query):
    assert search(query, ENTRIES) == []


def test_no_match():
    assert search("zzz", ENTRIES) == []


def test_case_insensitive_title_or_group_in_input_order():
    titles = [(e.title, e.group_title) for e in search("news", ENTRIES)]
    assert titles == [("NEWS HD", "Haber"), ("NEWS HD", "Yedek"), ("Yerel", "World News")]


def test_group_match():
    assert [e.title for e in search("film", ENTRIES)] == ["Film A"]


def test_accepts_any_iterable():
    assert len(search("spor", iter(ENTRIES))) == 1
