"""Token-pattern date formatting, e.g. ``yyyy-mm-dd``."""

from __future__ import annotations

import re
from datetime import date

DEFAULT_PATTERN = "yyyy-mm-dd"

# Longest tokens first; quoted text is a literal
_TOKEN_RE = re.compile(r"'[^']*'|yyyy|yy|mm|m|dd|d")

_FORMATTERS = {
    "yyyy": lambda d: f"{d.year:04d}",
    "yy": lambda d: f"{d.year % 100:02d}",
    "mm": lambda d: f"{d.month:02d}",
    "m": lambda d: str(d.month),
    "dd": lambda d: f"{d.day:02d}",
    "d": lambda d: str(d.day),
}

_PARSERS = {
    "yyyy": ("year", r"(\d{4})"),
    "yy": ("year2", r"(\d{2})"),
    "mm": ("month", r"(\d{2})"),
    "m": ("month", r"(\d{1,2})"),
    "dd": ("day", r"(\d{2})"),
    "d": ("day", r"(\d{1,2})"),
}


def format_date(value: date, pattern: str = DEFAULT_PATTERN) -> str:
    """Render ``value`` by substituting the tokens of ``pattern``.

    Supported tokens are ``yyyy``, ``yy``, ``mm``, ``m``, ``dd`` and ``d``.
    Text in single quotes is copied without the quotes; every other
    character passes through unchanged.
    """

    def _sub(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("'"):
            return token[1:-1]
        return _FORMATTERS[token](value)

    return _TOKEN_RE.sub(_sub, pattern)


def parse_date(text: str, pattern: str = DEFAULT_PATTERN) -> date:
    """Inverse of :func:`format_date` for the same pattern.

    Two-digit years are read as 2000-2099.

    Raises:
        ValueError: If ``text`` does not match ``pattern``, the pattern lacks
            a year, month or day token, or the fields name an impossible date.
    """
    regex: list[str] = []
    fields: list[str] = []
    pos = 0
    for match in _TOKEN_RE.finditer(pattern):
        regex.append(re.escape(pattern[pos:match.start()]))
        token = match.group(0)
        if token.startswith("'"):
            regex.append(re.escape(token[1:-1]))
        else:
            name, group = _PARSERS[token]
            fields.append(name)
            regex.append(group)
        pos = match.end()
    regex.append(re.escape(pattern[pos:]))

    found = re.fullmatch("".join(regex), text.strip())
    if found is None:
        raise ValueError(f"{text!r} does not match date pattern {pattern!r}")

    values: dict[str, int] = {}
    for name, raw in zip(fields, found.groups()):
        if name == "year2":
            name, number = "year", 2000 + int(raw)
        else:
            number = int(raw)
        if values.setdefault(name, number) != number:
            raise ValueError(f"Conflicting {name} values in {text!r}")

    missing = [name for name in ("year", "month", "day") if name not in values]
    if missing:
        raise ValueError(f"Date pattern {pattern!r} has no {', '.join(missing)} token")
    return date(values["year"], values["month"], values["day"])
