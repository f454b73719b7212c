"""Small text helpers shared by the manifest and compose generators."""
from __future__ import annotations

import math
import re
from typing import Iterable, List, Union

from .constants import VOLUME_PREFIXES

_EDGE_QUOTES = re.compile(r"^['\"]|['\"]$")
_KEY_NOISE = re.compile(r"[\"'\s]")


def strip_quotes(text: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    return _EDGE_QUOTES.sub("", text)


def clean_env_key(text: str) -> str:
    """Remove quotes and whitespace anywhere in an environment variable name."""
    return _KEY_NOISE.sub("", text)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_env_text(text: str) -> List[str]:
    """Split a ``KEY=value`` textarea into lines, stripping edge quotes per line.

    Blank lines are kept so the list mirrors what the user is editing; the
    compose generator drops them when rendering.
    """
    return [strip_quotes(line) for line in normalize_newlines(text).split("\n")]


def split_csv(text: str | None) -> List[str]:
    """Split a comma-separated list, trimming items and dropping empty ones."""
    if not text or not text.strip():
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def non_blank(values: Iterable[str]) -> List[str]:
    return [value for value in values if value.strip()]


def numbered_gallery(count: int) -> List[str]:
    return [f"{index}.jpg" for index in range(1, count + 1)]


def coerce_port(value: str) -> Union[int, float]:
    """Convert a port string to a number, NaN when it is not numeric.

    Blank text is 0 and digit-group underscores are rejected, as with
    JavaScript's ``Number()``.
    """
    text = value.strip()
    if not text:
        return 0
    if "_" in text:
        return math.nan
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return math.nan
    if number.is_integer():
        return int(number)
    return number


def fold_lines(text: str) -> List[str]:
    """Lay out free text as the content lines of a folded block scalar.

    Lines are trimmed, a blank line becomes two blank lines (paragraph break)
    and list-marker lines are indented two extra spaces so the YAML parser
    keeps their line breaks. Every Unicode line boundary splits a line,
    the same set the YAML reader breaks on.
    """
    folded: List[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            folded.extend(["", ""])
        elif line.startswith("-"):
            folded.append(f"  {line}")
        else:
            folded.append(line)
    return folded


def volume_warnings(volumes: Iterable[str]) -> List[str]:
    """Return volume entries that do not start with a recognized path variable."""
    return [
        volume
        for volume in volumes
        if volume.strip() and not volume.strip().startswith(VOLUME_PREFIXES)
    ]
