"""
Unit tests for the analytics package: dashboard stats, the filter/sort
pipeline, trade lists and share payloads.
"""
import base64
import json

import pytest

from skytracker.config import SHARE_BASE_URL
from skytracker.data.schemas import CatalogItem, ViewFilter, StatusFilter, SortKey, SortDirection
from skytracker.analytics.dashboard import (
    dashboard_stats, element_options, element_breakdown, collection_summary,
    filter_catalog, filter_rows,
)
from skytracker.analytics.trade import tradeable_items, trade_list_text, trade_summary, trade_line
from skytracker.analytics.share import (
    build_share_payload, encode_share_link, decode_share_link, owned_ids,
)


@pytest.fixture
def traded(store):
    """Two owned Fire figures for trade, one unowned figure flagged for trade."""
    for item_id in ("sunburn", "eruptor"):
        store.update_field(item_id, "have", True)
        store.update_field(item_id, "forTrade", True)
    store.update_field("ignitor", "forTrade", True)
    return store


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def test_total_value_counts_owned_only(store):
    store.update_field("spyro", "have", True)
    store.update_field("spyro", "count", 2)
    store.update_field("spyro", "value", 3.5)
    store.update_field("eruptor", "value", 100)

    stats = dashboard_stats(store)
    assert stats == {"total": 5, "have": 1, "need": 0, "forTrade": 0, "totalValue": 7.0}


def test_stats_on_empty_store(empty_store):
    assert dashboard_stats(empty_store)["total"] == 0
    assert element_breakdown(empty_store) == []
    assert collection_summary(empty_store)["completion_pct"] == 0.0


def test_element_options(store):
    assert element_options(store) == ["all", "Fire", "Magic", "Water"]


def test_element_breakdown_largest_first(store):
    store.update_field("eruptor", "have", True)
    rows = element_breakdown(store)
    assert rows[0]["element"] == "Fire"
    assert rows[0]["total"] == 3
    assert rows[0]["have"] == 1
    assert rows[0]["completion_pct"] == 33.3


def test_status_filter(traded):
    have = filter_catalog(traded, ViewFilter(status=StatusFilter.HAVE))
    assert [it.id for it in have] == ["eruptor", "sunburn"]
    trade = filter_catalog(traded, ViewFilter(status=StatusFilter.TRADE))
    assert [it.id for it in trade] == ["eruptor", "ignitor", "sunburn"]


def test_search_matches_name_element_or_category(store):
    assert [it.id for it in filter_catalog(store, ViewFilter(search="GILL"))] == ["gill-grunt"]
    assert len(filter_catalog(store, ViewFilter(search="fire"))) == 3
    assert len(filter_catalog(store, ViewFilter(search="core"))) == 5
    assert filter_catalog(store, ViewFilter(search="zzz")) == []


def test_element_filter_and_sort_desc(store):
    view = ViewFilter(element="Fire", sort_key=SortKey.NAME, direction=SortDirection.DESC)
    assert [it.name for it in filter_catalog(store, view)] == ["Sunburn", "Ignitor", "Eruptor"]


def test_trade_status_with_element_filter(store):
    for item_id in ("sunburn", "eruptor", "gill-grunt"):
        store.update_field(item_id, "have", True)
        store.update_field(item_id, "forTrade", True)

    view = ViewFilter(status=StatusFilter.TRADE, element="Fire")
    assert [it.id for it in filter_catalog(store, view)] == ["eruptor", "sunburn"]
    assert [it.name for it in tradeable_items(store, element="Fire")] == ["Eruptor", "Sunburn"]


def test_name_sort_ignores_case(empty_store):
    empty_store.import_catalog([
        CatalogItem(id="zap", name="Zap", element="Water"),
        CatalogItem(id="flameslinger", name="Flameslinger", element="Fire"),
        CatalogItem(id="eruptor", name="eruptor", element="Fire"),
        CatalogItem(id="bash", name="bash", element="Earth"),
    ])
    names = [it.name for it in filter_catalog(empty_store, ViewFilter())]
    assert names == ["bash", "eruptor", "Flameslinger", "Zap"]

    view = ViewFilter(direction=SortDirection.DESC)
    assert [it.name for it in filter_catalog(empty_store, view)] == ["Zap", "Flameslinger", "eruptor", "bash"]


def test_value_sort_ties_keep_catalog_order(store):
    store.update_field("gill-grunt", "value", 5)
    view = ViewFilter(sort_key=SortKey.VALUE, direction=SortDirection.DESC)
    ids = [it.id for it in filter_catalog(store, view)]
    assert ids == ["gill-grunt", "spyro", "eruptor", "ignitor", "sunburn"]

    view = ViewFilter(sort_key=SortKey.VALUE, direction=SortDirection.ASC)
    ids = [it.id for it in filter_catalog(store, view)]
    assert ids == ["spyro", "eruptor", "ignitor", "sunburn", "gill-grunt"]


def test_filter_rows_are_json_safe(store):
    rows = filter_rows(store)
    assert rows[0]["name"] == "Eruptor"
    assert type(rows[0]["count"]) is int
    assert type(rows[0]["have"]) is bool


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------

def test_tradeable_requires_owned_and_for_trade(traded):
    assert [it.name for it in tradeable_items(traded)] == ["Eruptor", "Sunburn"]
    assert [it.name for it in tradeable_items(traded, element="Fire")] == ["Eruptor", "Sunburn"]
    assert tradeable_items(traded, element="Water") == []
    assert [it.name for it in tradeable_items(traded, search="sun")] == ["Sunburn"]


def test_trade_text_empty(store):
    text = trade_list_text(store)
    assert text == "Skylanders Available for Trade:\n\nNo Skylanders currently available for trade."


def test_trade_text_lines(store):
    store.update_field("spyro", "have", True)
    store.update_field("spyro", "forTrade", True)
    store.update_field("spyro", "count", 2)
    store.update_field("spyro", "value", 12.5)

    text = trade_list_text(store)
    assert text == (
        "Skylanders Available for Trade:\n\n"
        "Spyro (Magic) - 2 available - Value: 12.50 each\n"
        "\nContact me to discuss trades!"
    )


def test_trade_line_zero_count_and_no_value():
    assert trade_line("Eruptor", "Fire", 0, 0.0) == "Eruptor (Fire) - 1 available"


def test_trade_summary(traded):
    traded.update_field("sunburn", "count", 3)
    traded.update_field("sunburn", "value", 2)
    summary = trade_summary(traded)
    assert summary["count"] == 2
    assert summary["totalValue"] == 6.0
    assert [r["id"] for r in summary["items"]] == ["eruptor", "sunburn"]


# ---------------------------------------------------------------------------
# Share
# ---------------------------------------------------------------------------

def test_share_payload_hides_values(store):
    store.update_field("spyro", "value", 9)
    payload = build_share_payload(store, "Mine", "desc", False, ["spyro", "missing"])
    assert payload["showValues"] is False
    assert [s["id"] for s in payload["skylanders"]] == ["spyro"]
    assert payload["skylanders"][0]["value"] is None


def test_share_payload_with_values(store):
    store.update_field("spyro", "value", 9)
    payload = build_share_payload(store, "Mine", "desc", True, ["spyro", "spyro"])
    assert len(payload["skylanders"]) == 1
    assert payload["skylanders"][0]["value"] == 9.0


def test_owned_ids_in_catalog_order(store):
    store.add_to_inventory("gill-grunt")
    store.add_to_inventory("spyro")
    assert owned_ids(store) == ["spyro", "gill-grunt"]


def test_share_link_decodes(store):
    payload = build_share_payload(store, "Mine ✨", "desc", False, ["spyro"])
    link = encode_share_link(payload, base_url="https://example.com/shared/")
    assert link.startswith("https://example.com/shared/")
    assert "+" not in link.rsplit("/", 1)[-1]
    assert decode_share_link(link) == payload


@pytest.mark.parametrize("link", ["https://example.com/shared/%%%", "bm90IGpzb24", "WzEsMl0"])
def test_decode_bad_links(link):
    with pytest.raises(ValueError):
        decode_share_link(link)


def test_decode_standard_alphabet_token():
    payload = {"title": "??????"}
    token = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
    assert "/" in token

    assert decode_share_link(f"{SHARE_BASE_URL}/{token}") == payload
    assert decode_share_link(f"https://example.com/shared/{token}", base_url="https://example.com/shared") == payload
    assert decode_share_link(token) == payload
