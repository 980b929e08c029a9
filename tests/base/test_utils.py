# tests/base/test_utils.py

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

import pytest
from pydantic import BaseModel, Field as PydanticField, HttpUrl

from search_criteria.base.utils import escape_criteria_value, prepare_for_request


# --- Escaping ---
@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("plain", "plain"),
        ("a+b", r"a\+b"),
        ("a-b", r"a\-b"),
        ("x && y", r"x \&\& y"),
        ("x || y", r"x \|\| y"),
        ("a|b", "a|b"),
        ("a&b", "a&b"),
        ('say "hi"', r"say \"hi\""),
        ("back\\slash", r"back\\slash"),
        ("(a){b}[c]", r"\(a\)\{b\}\[c\]"),
        ("^~*?:!", r"\^\~\*\?\:\!"),
    ],
)
def test_escape_criteria_value(raw, escaped):
    assert escape_criteria_value(raw) == escaped


def test_escape_is_single_pass():
    # An inserted backslash must not be escaped again.
    assert escape_criteria_value("\\+") == r"\\\+"


# --- Request preparation ---
class Color(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Point:
    x: int
    y: int


class Owner(BaseModel):
    user_name: str = PydanticField(alias="userName")
    homepage: Optional[HttpUrl] = None
    tags: List[str] = []


def test_prepare_passes_plain_values_through():
    assert prepare_for_request("x") == "x"
    assert prepare_for_request(5) == 5
    assert prepare_for_request(None) is None


def test_prepare_enum():
    assert prepare_for_request(Color.RED) == "red"


def test_prepare_dataclass():
    assert prepare_for_request(Point(1, 2)) == {"x": 1, "y": 2}


def test_prepare_pydantic_model_uses_aliases():
    owner = Owner(userName="alice", homepage="https://example.com/", tags=["a"])
    assert prepare_for_request(owner) == {
        "userName": "alice",
        "homepage": "https://example.com/",
        "tags": ["a"],
    }


def test_prepare_datetimes():
    aware = datetime(2012, 8, 21, 8, 35, tzinfo=timezone(timedelta(hours=2)))
    assert prepare_for_request(aware) == "2012-08-21T06:35:00.000Z"
    assert prepare_for_request(datetime(2012, 8, 21, 6, 35, 1, 250000)) == (
        "2012-08-21T06:35:01.250"
    )
    assert prepare_for_request(date(2012, 8, 21)) == "2012-08-21"


def test_prepare_nested_containers():
    data = {"colors": [Color.RED, Color.BLUE], "point": Point(0, 1), "pair": (Color.RED, 1)}
    assert prepare_for_request(data) == {
        "colors": ["red", "blue"],
        "point": {"x": 0, "y": 1},
        "pair": ("red", 1),
    }


def test_prepare_set_becomes_list():
    assert prepare_for_request({Color.RED}) == ["red"]
