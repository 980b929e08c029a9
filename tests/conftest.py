# tests/conftest.py
import logging

import pytest

from search_criteria import (
    FacetOptions,
    FacetQuery,
    Query,
    SearchRequestAssembler,
    where,
)

# Surface library debug logs in failing test output
logging.getLogger("search_criteria").setLevel(logging.DEBUG)


@pytest.fixture
def assembler() -> SearchRequestAssembler:
    return SearchRequestAssembler()


@pytest.fixture
def simple_query() -> Query:
    return Query(where("field_1").is_("value_1"))


@pytest.fixture
def facet_query() -> FacetQuery:
    return FacetQuery(where("field_1").is_("value_1")).set_facet_options(
        FacetOptions("facet_1", "facet_2")
    )
