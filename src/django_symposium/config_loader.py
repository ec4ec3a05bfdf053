"""TOML loader for conference import files.

Loads and validates a TOML file listing conferences as ``[[conferences]]``
tables so they can be created programmatically::

    [[conferences]]
    title = "PyCon US"
    url = "https://us.pycon.org"
    starts_at = 2027-05-14
    ends_at = 2027-05-22
    cfp_starts_at = 2026-11-01T00:00:00Z
    cfp_ends_at = 2026-12-19
    timezone = "America/Los_Angeles"
"""

import datetime
import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_REQUIRED_FIELDS: set[str] = {"title"}
_TEXT_FIELDS: set[str] = {"title", "description", "url", "timezone"}
_NUMBER_FIELDS: set[str] = {"latitude", "longitude"}
DATE_FIELDS: tuple[str, ...] = ("starts_at", "ends_at", "cfp_starts_at", "cfp_ends_at")
_ALLOWED_FIELDS: set[str] = _TEXT_FIELDS | _NUMBER_FIELDS | set(DATE_FIELDS)


def _validate_mapping(mapping: object, required: set[str], label: str) -> None:
    """Ensure *mapping* is a dict that contains every *required* key.

    Args:
        mapping: The value to check.
        required: Keys that must be present.
        label: Human-readable context for error messages.

    Raises:
        TypeError: If *mapping* is not a dict.
        ValueError: If any required key is missing.
    """
    if not isinstance(mapping, dict):
        msg = f"{label} must be a mapping"
        raise TypeError(msg)
    missing = required - mapping.keys()
    if missing:
        msg = f"{label} is missing required fields: {', '.join(sorted(missing))}"
        raise ValueError(msg)


def _validate_conference(conf: dict[str, Any], label: str) -> None:
    """Check field names and value types of a single conference entry."""
    unknown = conf.keys() - _ALLOWED_FIELDS
    if unknown:
        msg = f"{label} has unknown fields: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    for key in _TEXT_FIELDS & conf.keys():
        if not isinstance(conf[key], str):
            msg = f"{label}.{key} must be a string"
            raise TypeError(msg)
    if not conf["title"].strip():
        msg = f"{label}.title must be a non-empty string"
        raise ValueError(msg)

    for key in _NUMBER_FIELDS & conf.keys():
        if isinstance(conf[key], bool) or not isinstance(conf[key], (int, float)):
            msg = f"{label}.{key} must be a number"
            raise TypeError(msg)

    for key in DATE_FIELDS:
        if key in conf and not isinstance(conf[key], (datetime.date, datetime.datetime)):
            msg = f"{label}.{key} must be a TOML date or datetime"
            raise TypeError(msg)

    if "timezone" in conf:
        try:
            ZoneInfo(conf["timezone"])
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"{label}.timezone is not a known time zone: {conf['timezone']!r}"
            raise ValueError(msg) from exc


def _validate_unique_titles(items: list[dict[str, Any]], label: str) -> None:
    """Reject files that list the same conference title twice."""
    seen: set[str] = set()
    duplicates: set[str] = set()

    for item in items:
        title = item["title"].strip()
        if title in seen:
            duplicates.add(title)
        seen.add(title)

    if duplicates:
        msg = f"{label} has duplicate titles: {', '.join(sorted(duplicates))}"
        raise ValueError(msg)


def load_conference_list(path: str | Path) -> list[dict[str, Any]]:
    """Load and validate a conference import TOML file.

    Args:
        path: Filesystem path to the TOML file.

    Returns:
        The list of ``conferences`` mappings from the parsed TOML, with native
        types (``datetime.date`` or ``datetime.datetime`` for dates).

    Raises:
        FileNotFoundError: If *path* does not exist.
        TypeError: If an entry or value has the wrong type.
        ValueError: If required keys are missing, titles repeat, or the file is
            not valid TOML.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Conference import file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as fh:
        try:
            data: dict[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ValueError(msg) from exc

    items = data.get("conferences")
    if not isinstance(items, list) or not items:
        msg = "conferences must be a non-empty list of [[conferences]] tables"
        raise ValueError(msg)

    for idx, item in enumerate(items):
        label = f"conferences[{idx}]"
        _validate_mapping(item, _REQUIRED_FIELDS, label)
        _validate_conference(item, label)

    _validate_unique_titles(items, "conferences")
    return items
