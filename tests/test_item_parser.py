import datetime
import logging

import pytest

from patchping.datatypes.errors import ItemError
from patchping.feed import item_parser
from patchping.feed.item_parser import build_news_item, has_patch_tag, parse_news_item, parse_news_items

from conftest import make_raw_item


def test_parse_well_formed_patch_item():
    item = parse_news_item(make_raw_item(gid="42", date=1_700_000_000, tags=("patchnotes", "mod_require_rating")))

    assert item is not None
    assert item.identifier == "42"
    assert item.title == "Gameplay Update 42"
    assert item.author == "Valve"
    assert item.url == "https://store.steampowered.com/news/42"
    assert item.published_at == datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)
    assert item.tags == frozenset({"patchnotes", "mod_require_rating"})


@pytest.mark.parametrize("tags", [None, (), ("news",), ("PatchNotes",)])
def test_items_without_patch_tag_are_never_surfaced(tags):
    assert parse_news_item(make_raw_item(tags=tags)) is None


def test_missing_tags_is_logged_at_debug(caplog, monkeypatch):
    monkeypatch.setattr(item_parser.logger, "propagate", True)
    with caplog.at_level(logging.DEBUG, logger=item_parser.logger.name):
        assert has_patch_tag(make_raw_item(gid="55", tags=None)) is False
    assert any("'55' has no tags" in r.getMessage() and r.levelno == logging.DEBUG for r in caplog.records)


def test_non_list_tags_are_rejected():
    raw = make_raw_item()
    raw["tags"] = "patchnotes"
    assert has_patch_tag(raw) is False
    assert parse_news_item(raw) is None


def test_non_string_tags_are_ignored():
    raw = make_raw_item(tags=(7, None, "patchnotes"))
    item = parse_news_item(raw)
    assert item is not None
    assert item.tags == frozenset({"patchnotes"})


def test_custom_patch_tag():
    raw = make_raw_item(tags=("hotfix",))
    assert parse_news_item(raw) is None
    assert parse_news_item(raw, patch_tag="hotfix") is not None


@pytest.mark.parametrize(
    "field, value",
    [
        ("gid", 1001),
        ("title", None),
        ("author", ["Valve"]),
        ("url", 3),
        ("date", "1700000000"),
        ("date", True),
        ("date", 1.5),
        ("date", 1_700_000_000.0),
    ],
)
def test_wrongly_typed_field_is_skipped(field, value):
    raw = make_raw_item(**{field: value})
    with pytest.raises(ItemError):
        build_news_item(raw)
    assert parse_news_item(raw) is None


@pytest.mark.parametrize("field", ["gid", "title", "author", "url", "date"])
def test_missing_field_is_skipped(field):
    raw = make_raw_item()
    del raw[field]
    assert parse_news_item(raw) is None


def test_malformed_item_does_not_stop_the_batch():
    batch = [make_raw_item(gid=str(n), date=1_700_000_000 + n) for n in range(10)]
    del batch[4]["url"]

    items = parse_news_items(batch)

    assert len(items) == 9
    assert [item.identifier for item in items] == [str(n) for n in range(10) if n != 4]


def test_non_dict_entries_are_skipped():
    items = parse_news_items(["garbage", None, 12, make_raw_item(gid="ok")])
    assert [item.identifier for item in items] == ["ok"]


def test_news_item_is_immutable():
    item = parse_news_item(make_raw_item())
    with pytest.raises(Exception):
        item.title = "changed"  # type: ignore[misc]
