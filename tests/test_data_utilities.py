import pytest

from jobber_nodes.data_utilities import (
    get_path, parse_flag, parse_json_object, remove_empty_properties, user_error_messages,
)
from jobber_nodes.jobber_errors import InvalidInput


def test_remove_empty_properties_drops_only_none_and_empty_string() -> None:
    cleaned = remove_empty_properties({
        "firstName": "Ada",
        "lastName": "",
        "companyName": None,
        "isCompany": False,
        "quantity": 0,
        "tags": [],
    })

    assert cleaned == {"firstName": "Ada", "isCompany": False, "quantity": 0, "tags": []}


def test_remove_empty_properties_does_not_mutate_input() -> None:
    original = {"a": "", "b": 1}
    remove_empty_properties(original)
    assert original == {"a": "", "b": 1}


def test_get_path() -> None:
    data = {"client": {"properties": {"edges": []}}}
    assert get_path(data, "client.properties") == {"edges": []}
    assert get_path(data, "client.missing") is None
    assert get_path({"client": "text"}, "client.properties") is None


def test_parse_json_object() -> None:
    assert parse_json_object('{"id": "1"}') == {"id": "1"}
    assert parse_json_object("") == {}
    assert parse_json_object({"id": "2"}) == {"id": "2"}
    with pytest.raises(InvalidInput, match="Variables must be valid JSON"):
        parse_json_object("{not json")
    with pytest.raises(InvalidInput, match="JSON object"):
        parse_json_object("[1, 2]")


def test_user_error_messages() -> None:
    assert user_error_messages([{"message": "Email invalid"}, {"path": ["x"]}]) == ["Email invalid", "Unknown error"]


@pytest.mark.parametrize("value,expected", [
    (True, True), (False, False), ("true", True), ("Yes", True), ("1", True), ("on", True),
    ("false", False), ("0", False), ("no", False), (1, True), (0, False),
])
def test_parse_flag(value, expected) -> None:
    assert parse_flag(value) is expected


def test_parse_flag_blank_uses_default() -> None:
    assert parse_flag(None) is False
    assert parse_flag("", default=True) is True


def test_parse_flag_rejects_objects() -> None:
    with pytest.raises(InvalidInput):
        parse_flag({"x": 1})
