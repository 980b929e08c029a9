# src/search_criteria/__init__.py

"""
Search Criteria Library Initialization.

This package compiles fluent field-level criteria into boolean query and
filter trees for a document search engine, and assembles them together
with pagination, sort, projection and facet options into one search
request description.

It initializes a logger with a NullHandler and makes the criteria, query
envelope and request assembler available at the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for "search_criteria".
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Exception Exports
# --------------------------------------------------------------------------
from .base.exceptions import (
    ChainSealedError,
    InvalidArgumentError,
    UnsupportedOperationError,
)

# --------------------------------------------------------------------------
# Criteria Exports
# --------------------------------------------------------------------------
from .base.field import Field, FieldsProxy
from .base.geo import Distance, DistanceUnit, GeoLocation
from .base.criteria import Criteria, MatchAllCriteria, StringCriteria, where
from .base.translators import FilterTranslator, LeafTranslator, ScoredQueryTranslator

# --------------------------------------------------------------------------
# Query Envelope Exports
# --------------------------------------------------------------------------
from .base.sort import Direction, Order, PageRequest, Sort
from .base.query import FacetOptions, FacetQuery, FacetSort, FilterQuery, Query

# --------------------------------------------------------------------------
# Request Assembly Exports
# --------------------------------------------------------------------------
from .request.assembler import SearchRequestAssembler
from .request.facets import FacetEntry, facet_results_from_response

__all__ = [
    # Exceptions
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "ChainSealedError",
    # Criteria
    "Field",
    "FieldsProxy",
    "GeoLocation",
    "Distance",
    "DistanceUnit",
    "Criteria",
    "StringCriteria",
    "MatchAllCriteria",
    "where",
    "LeafTranslator",
    "ScoredQueryTranslator",
    "FilterTranslator",
    # Query envelope
    "Direction",
    "Order",
    "Sort",
    "PageRequest",
    "Query",
    "FilterQuery",
    "FacetQuery",
    "FacetOptions",
    "FacetSort",
    # Request
    "SearchRequestAssembler",
    "FacetEntry",
    "facet_results_from_response",
    # Logging
    "logger",
]

__version__ = "0.1.0"
