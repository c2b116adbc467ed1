"""Helper utilities for Job Sheet AI."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} span in text, or None.
    Braces inside JSON string literals (including escaped quotes) are not counted.
    """
    if not text:
        return None
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        # Unbalanced from this brace; try the next opening brace
        start = text.find("{", start + 1)
    return None


def truncate_with_marker(text: str, limit: int, marker: str = "...") -> str:
    """Cut text to limit characters, appending marker only when something was cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker


def format_local_time(value: datetime, tz_name: str) -> str:
    """Render an aware timestamp in the given zone as YYYY/MM/DD HH:MM:SS."""
    return value.astimezone(ZoneInfo(tz_name)).strftime("%Y/%m/%d %H:%M:%S")
