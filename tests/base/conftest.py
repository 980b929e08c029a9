from typing import Any, Dict, List, Optional

import pytest

from search_criteria.base.translators import FilterTranslator, ScoredQueryTranslator


# --- Clause builders mirroring the emitted shapes ---
def wildcard(field: str, pattern: str) -> Dict[str, Any]:
    return {
        "query_string": {
            "default_field": field,
            "query": pattern,
            "analyze_wildcard": True,
        }
    }


def match(field: str, value: Any) -> Dict[str, Any]:
    return {"match": {field: {"query": value}}}


def term(field: str, value: Any) -> Dict[str, Any]:
    return {"term": {field: value}}


def leaf(*clauses: Dict[str, Any], boost: Optional[float] = None) -> Dict[str, Any]:
    node: Dict[str, Any] = {"must": list(clauses)}
    if boost is not None:
        node["boost"] = boost
    return {"bool": node}


def filter_leaf(*clauses: Dict[str, Any]) -> Dict[str, Any]:
    return {"bool": {"filter": list(clauses)}}


def must(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"bool": {"must": list(children)}}


def should(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"bool": {"should": list(children)}}


def negated(tree: Dict[str, Any]) -> Dict[str, Any]:
    return {"bool": {"must_not": [tree]}}


# --- Tree search helpers ---
def find_clauses(tree: Any, clause_type: str) -> List[Dict[str, Any]]:
    """Recursively collects every clause body of ``clause_type`` in an emitted tree."""
    found: List[Dict[str, Any]] = []
    if isinstance(tree, dict):
        for key, value in tree.items():
            if key == clause_type:
                found.append(value)
            found.extend(find_clauses(value, clause_type))
    elif isinstance(tree, list):
        for item in tree:
            found.extend(find_clauses(item, clause_type))
    return found


def assert_clause_present(
    tree: Dict[str, Any],
    clause_type: str,
    expected_body: Any = ...,
    check_count: Optional[int] = 1,
):
    matches = find_clauses(tree, clause_type)
    if check_count is not None:
        assert len(matches) == check_count, (
            f"Expected {check_count} '{clause_type}' clause(s) but found {len(matches)} in {tree!r}"
        )
    else:
        assert matches, f"Expected at least one '{clause_type}' clause in {tree!r}"
    if expected_body is not ...:
        assert expected_body in matches, (
            f"'{clause_type}' clause {expected_body!r} not found among {matches!r}"
        )


# --- Fixtures ---
@pytest.fixture
def scored_translator() -> ScoredQueryTranslator:
    return ScoredQueryTranslator()


@pytest.fixture
def filter_translator() -> FilterTranslator:
    return FilterTranslator()
