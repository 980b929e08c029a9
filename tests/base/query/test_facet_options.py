# tests/base/query/test_facet_options.py

import pytest

from search_criteria.base.exceptions import InvalidArgumentError, UnsupportedOperationError
from search_criteria.base.field import Field
from search_criteria.base.query import FacetOptions, FacetQuery, FacetSort
from search_criteria.base.sort import PageRequest


def test_facet_options_require_fields():
    with pytest.raises(InvalidArgumentError):
        FacetOptions()


def test_facet_options_defaults():
    options = FacetOptions("facet_1", Field("facet_2"))
    assert [f.name for f in options.facet_on_fields] == ["facet_1", "facet_2"]
    assert options.has_fields()
    assert options.facet_limit == 10
    assert options.facet_sort is FacetSort.COUNT
    assert options.facet_min_count == 1


def test_add_facet_on_field():
    options = FacetOptions("a").add_facet_on_field("b")
    assert [f.name for f in options.facet_on_fields] == ["a", "b"]
    with pytest.raises(InvalidArgumentError):
        options.add_facet_on_field(None)


@pytest.mark.parametrize("limit, expected", [(5, 5), (1, 1), (0, 1), (-3, 1)])
def test_facet_limit_is_at_least_one(limit, expected):
    assert FacetOptions("a").set_facet_limit(limit).facet_limit == expected


def test_facet_sort():
    options = FacetOptions("a").set_facet_sort(FacetSort.TERM)
    assert options.facet_sort is FacetSort.TERM
    with pytest.raises(InvalidArgumentError):
        options.set_facet_sort(None)


def test_page_request_reflects_limit():
    assert FacetOptions("a").set_facet_limit(7).page_request == PageRequest(0, 7)


def test_unsupported_setters():
    options = FacetOptions("a")
    with pytest.raises(UnsupportedOperationError):
        options.set_facet_min_count(3)
    with pytest.raises(UnsupportedOperationError):
        options.set_page_request(PageRequest(1, 5))


def test_set_none_facet_options_clears(facet_query):
    facet_query.set_facet_options(None)
    assert facet_query.facet_options is None
    assert not facet_query.has_facet_options()


def test_facet_options_without_fields_rejected():
    options = FacetOptions("a")
    options._facet_on_fields.clear()
    with pytest.raises(InvalidArgumentError):
        FacetQuery().set_facet_options(options)


def test_repr():
    options = FacetOptions("a").set_facet_limit(3)
    assert repr(options) == "FacetOptions(fields=['a'], limit=3, sort=COUNT)"


@pytest.mark.parametrize("facet_sort", ["COUNT", "count", 0])
def test_facet_sort_must_be_a_facet_sort(facet_sort):
    options = FacetOptions("a")
    with pytest.raises(InvalidArgumentError, match="Expected FacetSort"):
        options.set_facet_sort(facet_sort)
    assert options.facet_sort is FacetSort.COUNT


@pytest.mark.parametrize("limit", [None, "5", 2.5, True])
def test_facet_limit_must_be_an_integer(limit):
    options = FacetOptions("a")
    with pytest.raises(InvalidArgumentError, match="Facet limit must be an integer"):
        options.set_facet_limit(limit)
    assert options.facet_limit == 10
