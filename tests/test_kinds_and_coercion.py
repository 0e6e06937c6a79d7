from collections import OrderedDict

import pytest

from json_assert import JsonAssert, JsonParseError, get_json_object, to_json_object
from json_assert.kinds import JsonKind, kind_of


@pytest.mark.parametrize("value, kind", [
    (None, JsonKind.NULL),
    (True, JsonKind.BOOLEAN),
    (False, JsonKind.BOOLEAN),
    (0, JsonKind.NUMBER),
    (1.5, JsonKind.NUMBER),
    ("", JsonKind.TEXT),
    ([], JsonKind.SEQUENCE),
    ((1, 2), JsonKind.SEQUENCE),
    ({}, JsonKind.MAPPING),
    (OrderedDict(a=1), JsonKind.MAPPING),
])
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_kind_of_rejects_non_json_values():
    with pytest.raises(TypeError):
        kind_of(object())


def test_text_is_decoded():
    assert get_json_object('{"foo": [1, 2.5, null, true]}') == {"foo": [1, 2.5, None, True]}


def test_bytes_are_decoded():
    assert get_json_object(b'[1, "two"]') == [1, "two"]


@pytest.mark.parametrize("text, expected", [
    ("42", 42),
    ('"hello"', "hello"),
    ("null", None),
    ("false", False),
])
def test_scalar_text(text, expected):
    assert get_json_object(text) == expected


def test_structures_are_returned_unchanged():
    data = {"foo": {"bar": [33]}}
    assert get_json_object(data) is data
    items = [1, 2]
    assert get_json_object(items) is items


@pytest.mark.parametrize("text", ['{"a": {"b": [1]}}', "[1, 2]", "5", "1.5", "true", "null"])
def test_coercion_is_idempotent(text):
    once = get_json_object(text)
    assert get_json_object(once) == once


@pytest.mark.parametrize("value", [5, 1.5, True, None])
def test_decoded_scalars_pass_through(value):
    assert get_json_object(value) is value


def test_alias():
    assert to_json_object is get_json_object


def test_malformed_text_raises_parse_error():
    with pytest.raises(JsonParseError) as excinfo:
        get_json_object('{"foo": ')
    assert excinfo.value.pos == 8
    assert isinstance(excinfo.value, ValueError)
    assert not isinstance(excinfo.value, AssertionError)


def test_undecodable_bytes_raise_parse_error():
    with pytest.raises(JsonParseError):
        get_json_object(b"\xff\xfe\xfd")


def test_coerce_then_assert(ja):
    body = JsonAssert.get_json_object('{"foo": {"bar": [33]}}')
    ja.assert_json_value_equals(33, "foo.bar[0]", body)
