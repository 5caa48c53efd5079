"""Response formatting helpers."""
from datetime import datetime
from enum import Enum
from typing import Any


class ResponseFormat(str, Enum):
    HTML = "html"
    JSON = "json"


def format_timestamp(value: Any, fmt: str = "%Y-%m-%d %H:%M") -> str:
    """Render a created_at value for display. Blank for missing values."""
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.strftime(fmt)
    return str(value)


def format_optional(value: Any) -> str:
    return "" if value is None else str(value)
