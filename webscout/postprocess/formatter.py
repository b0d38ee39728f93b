"""
Result formatting for tool responses.

This module converts result dataclasses into the plain, JSON-serializable
dictionaries returned to callers: camelCase keys, enum values unwrapped and
unset optional fields omitted.
"""

import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict


_CAMEL_BOUNDARY = re.compile(r'_([a-z])')


class FormattingError(Exception):
    """Custom exception for result formatting errors."""

    def __init__(self, message: str, error_type: str = "FORMATTING_ERROR"):
        super().__init__(message)
        self.error_type = error_type


def to_camel_case(name: str) -> str:
    """Convert a snake_case field name to camelCase."""
    return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


def to_serializable(obj: Any) -> Any:
    """
    Convert an object to JSON-serializable format.

    Dataclass fields set to None are dropped; dict keys other than
    dataclass field names (such as page metadata names) are kept as-is.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for f in fields(obj):
            value = getattr(obj, f.name)
            if value is None:
                continue
            result[to_camel_case(f.name)] = to_serializable(value)
        return result
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {key: to_serializable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_serializable(item) for item in obj]
    return obj


def format_result(result: Any) -> Dict[str, Any]:
    """
    Format a result dataclass into a response dictionary.

    Raises:
        FormattingError: If the result is not a dataclass instance
    """
    if not is_dataclass(result) or isinstance(result, type):
        raise FormattingError(f"Cannot format {type(result).__name__}: not a dataclass instance")
    return to_serializable(result)
