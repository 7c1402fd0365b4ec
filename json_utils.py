"""
JSON utilities backed by orjson
===============================

Thin str-based wrapper so callers can treat orjson like the standard json
module when printing suggestions, matches and edit plans.
"""

from typing import Any, Callable, Optional

import orjson


def dumps(obj: Any, indent: Optional[int] = None, default: Optional[Callable] = None) -> str:
    """
    Serialize obj to a JSON string.

    Args:
        obj: Object to serialize
        indent: Any non-None value pretty-prints with two spaces
        default: Callable for objects orjson cannot serialize (e.g. default=str)
    """
    option = orjson.OPT_NON_STR_KEYS
    if indent is not None:
        option |= orjson.OPT_INDENT_2
    # orjson.dumps returns bytes
    return orjson.dumps(obj, default=default, option=option).decode("utf-8")


def loads(s: Any) -> Any:
    """Deserialize a JSON str or bytes."""
    return orjson.loads(s)


JSONDecodeError = orjson.JSONDecodeError
