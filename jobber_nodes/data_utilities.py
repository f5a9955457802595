import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .jobber_errors import InvalidInput


def remove_empty_properties(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of `values` without the keys whose value is None or "".
    Falsy but meaningful values (0, False, empty lists) are kept as they are.
    """
    return {k: v for k, v in values.items() if v is not None and v != ""}


def get_path(data: Any, dotted_path: str) -> Optional[Any]:
    """
    Walks `data` along a dot-separated path ("clients", "client.properties").
    Returns None as soon as a segment is missing or the value is not an object.
    """
    current = data
    for part in dotted_path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def parse_json_object(raw: Union[str, Mapping[str, Any], None], what: str = "Variables") -> Dict[str, Any]:
    """Parses caller-supplied JSON text into a dict. Mappings are copied as-is."""
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{what} must be valid JSON") from e
    if not isinstance(parsed, dict):
        raise InvalidInput(f"{what} must be a JSON object")
    return parsed


def user_error_messages(user_errors: Iterable[Mapping[str, Any]]) -> List[str]:
    return [str(e.get("message", "Unknown error")) for e in user_errors]


def parse_flag(value: Any, default: bool = False) -> bool:
    """Booleans pass through; strings are true only for 1/true/yes/on; None or "" gives `default`."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        return text in {"1", "true", "yes", "on"}
    if isinstance(value, (int, float)):
        return value != 0
    raise InvalidInput(f"Expected a boolean, got {type(value).__name__}")
