from typing import TYPE_CHECKING, Any, cast

import orjson

if TYPE_CHECKING:
    from pathlib import Path


def load_json(json_str: str | bytes) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON string.

    Args:
        json_str: The JSON string to parse.

    Returns:
        The parsed JSON data as a dictionary or list, or None if parsing fails.
    """
    try:
        return cast("dict[str, object] | list[object]", orjson.loads(json_str))
    except orjson.JSONDecodeError:
        return None


def load_json_file(file_path: "Path") -> dict[str, object] | list[object] | None:
    """Load and parse a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The parsed JSON data as a dictionary or list, or None if it is not JSON.
    """
    return load_json(file_path.read_bytes())


def dump_json(data: Any, *, indent: bool = False) -> str:  # pyright: ignore[reportExplicitAny]
    """Serialize data to a JSON string.

    Args:
        data: JSON-compatible data.
        indent: Whether to pretty-print with two-space indentation.

    Returns:
        The JSON document as text.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")
