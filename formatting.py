import math
import re
from typing import Any, List, NamedTuple, Optional

PREFIX = 'god!'
MAX_REPLY_CHARS = 1500

TMX_ID_PATTERN = re.compile(r'^[0-9]{3,12}$')


class ParsedCommand(NamedTuple):
    name: str
    args: List[str]


def parse_command(content: str, prefix: str = PREFIX) -> Optional[ParsedCommand]:
    """Split a prefixed chat message into a lowercased command name and its arguments"""
    text = (content or '').strip()
    if not text.lower().startswith(prefix.lower()):
        return None

    parts = text[len(prefix):].split()
    if not parts:
        return ParsedCommand('', [])
    return ParsedCommand(parts[0].lower(), parts[1:])


def as_number(value: Any) -> Optional[float]:
    """Coerce API values like 83456 or "83456" to a finite number, None otherwise"""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str) and '_' in value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _plain(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"


def format_time(value: Any) -> str:
    ms = as_number(value)
    if ms is None:
        return str(value)

    minutes = int(ms // 60000)
    seconds = int((ms % 60000) // 1000)
    milliseconds = ms % 1000

    return f"{minutes:02d}:{seconds:02d}.{_plain(milliseconds).zfill(3)}"


def format_points(value: Any) -> str:
    points = as_number(value)
    if points is None:
        return str(value)
    if points.is_integer():
        return f"{int(points):,}"
    return f"{points:,.3f}".rstrip('0').rstrip('.')


def is_likely_tmx_id(value: Any) -> bool:
    return bool(TMX_ID_PATTERN.match(str(value or '').strip()))


def truncate(text: str, limit: int = MAX_REPLY_CHARS) -> str:
    return text[:limit]
