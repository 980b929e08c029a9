# tests/request/test_facet_results.py

import logging

import pytest

from search_criteria import (
    FacetEntry,
    FacetQuery,
    InvalidArgumentError,
    facet_results_from_response,
    where,
)


@pytest.fixture
def response():
    return {
        "hits": {"total": {"value": 3}, "hits": []},
        "aggregations": {
            "facet_1": {
                "buckets": [
                    {"key": "spring", "doc_count": 2},
                    {"key": "solr", "doc_count": 1},
                ]
            },
            "facet_2": {"buckets": []},
        },
    }


def test_facet_results(facet_query, response):
    results = facet_results_from_response(facet_query, response)
    assert list(results) == ["facet_1", "facet_2"]
    assert results["facet_1"] == [
        FacetEntry("facet_1", "spring", 2),
        FacetEntry("facet_1", "solr", 1),
    ]
    assert results["facet_2"] == []


def test_missing_facet_field_is_empty(facet_query, response, caplog):
    del response["aggregations"]["facet_2"]
    search_logger = logging.getLogger("search_criteria")
    search_logger.propagate = True
    try:
        with caplog.at_level(logging.WARNING, logger="search_criteria"):
            results = facet_results_from_response(facet_query, response)
    finally:
        search_logger.propagate = False
    assert results["facet_2"] == []
    assert "facet_2" in caplog.text


def test_query_without_facet_options(response):
    query = FacetQuery(where("field_1").is_("value_1"))
    assert facet_results_from_response(query, response) == {}


@pytest.mark.parametrize("empty", [None, {}, {"hits": {}}, {"aggregations": {}}])
def test_empty_response(facet_query, empty):
    assert facet_results_from_response(facet_query, empty) == {}


def test_none_query_fails(response):
    with pytest.raises(InvalidArgumentError):
        facet_results_from_response(None, response)
