# tests/base/test_field.py

import pytest

from search_criteria.base.exceptions import InvalidArgumentError
from search_criteria.base.field import Field, FieldsProxy, to_field


def test_field_exposes_name_and_path():
    field = Field("title")
    assert field.name == "title"
    assert field.path == "title"
    assert str(field) == "title"
    assert repr(field) == "Field(name='title')"


def test_nested_attribute_access():
    assert Field("address").city.name == "address.city"
    assert Field("a").b.c.path == "a.b.c"


def test_item_access():
    assert Field("tags")[0].name == "tags.0"
    assert Field("meta")["key"].name == "meta.key"


@pytest.mark.parametrize("key", [1.5, None, True])
def test_item_access_rejects_unsupported_keys(key):
    with pytest.raises(TypeError):
        Field("tags")[key]


def test_item_access_rejects_negative_index():
    with pytest.raises(IndexError):
        Field("tags")[-1]


def test_private_attribute_lookup_raises():
    with pytest.raises(AttributeError):
        Field("title")._missing


def test_field_is_immutable():
    field = Field("title")
    with pytest.raises(AttributeError):
        field.other = "x"


def test_field_equality_and_hash():
    assert Field("a") == Field("a")
    assert Field("a") != Field("b")
    assert len({Field("a"), Field("a"), Field("b")}) == 2
    assert Field("a") != "a"


def test_none_field_rejected():
    with pytest.raises(InvalidArgumentError, match="must not be None"):
        Field(None)


@pytest.mark.parametrize("name", ["", "  "])
def test_blank_field_rejected(name):
    with pytest.raises(InvalidArgumentError):
        Field(name)


def test_to_field():
    field = Field("a")
    assert to_field(field) is field
    assert to_field("a") == field
    with pytest.raises(InvalidArgumentError):
        to_field(3)


def test_fields_proxy():
    fields = FieldsProxy()
    assert fields.title == Field("title")
    assert fields["nested.path"].name == "nested.path"
    assert fields.address.city.name == "address.city"
    assert dir(fields) == []
    with pytest.raises(AttributeError):
        fields._private
