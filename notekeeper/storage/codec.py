"""
Note Collection Codec.

Converts the note collection to and from its persisted JSON form:
an array of objects with the fields ``id``, ``title``, ``content``,
``createdAt`` and ``updatedAt``. Those names and types are fixed so
previously persisted data stays readable. Non-ASCII text is written as
``\\uXXXX`` escapes, so unpaired surrogates carried over from older data
still fit any UTF-8 medium.

Decoding is lenient. Unreadable input becomes an empty collection and
each element is checked on its own: elements without an id are dropped,
other bad fields are replaced with safe defaults.
"""

import json
import math
from collections.abc import Iterable
from typing import Any

from notekeeper.core.exceptions import DecodeError
from notekeeper.core.logging import get_logger
from notekeeper.core.utils import Clock, now_ms
from notekeeper.schemas.note import Note

logger = get_logger(__name__)


def encode(notes: Iterable[Note]) -> str:
    """Serialize notes to the persisted JSON array."""
    return json.dumps(
        [note.model_dump(by_alias=True) for note in notes],
        separators=(",", ":"),
    )


def decode(raw: str | None, now: Clock = now_ms) -> list[Note]:
    """
    Parse persisted text into notes. Never raises.

    Args:
        raw: Persisted text; None or empty means nothing was stored
        now: Clock used for timestamps that are missing or not numeric

    Returns:
        Notes in persisted order, or [] if the text is unusable
    """
    if not raw:
        return []
    try:
        items = _parse_array(raw)
    except DecodeError as e:
        logger.warning(
            "Discarding unreadable note data",
            extra={"reason": e.message, "size": len(raw)},
        )
        return []

    notes: list[Note] = []
    seen: set[str] = set()
    fallback_ms: int | None = None

    def fallback() -> int:
        # one reading of the clock per decode
        nonlocal fallback_ms
        if fallback_ms is None:
            fallback_ms = now()
        return fallback_ms

    for index, item in enumerate(items):
        if not isinstance(item, dict) or not _has_id(item.get("id")):
            logger.debug("Dropping malformed note entry", extra={"index": index})
            continue

        note_id = _id_to_str(item["id"])
        if note_id in seen:
            logger.debug("Dropping duplicate note id", extra={"note_id": note_id})
            continue
        seen.add(note_id)

        created_at = _timestamp(item.get("createdAt"), fallback)
        updated_at = max(_timestamp(item.get("updatedAt"), fallback), created_at)

        notes.append(
            Note(
                id=note_id,
                title=_text(item.get("title")),
                content=_text(item.get("content")),
                created_at=created_at,
                updated_at=updated_at,
            )
        )

    return notes


def _parse_array(raw: str) -> list[Any]:
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _has_id(value: Any) -> bool:
    if isinstance(value, str):
        return value != ""
    return _is_number(value) and value != 0


def _id_to_str(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _timestamp(value: Any, fallback: Clock) -> int:
    if _is_number(value):
        return int(value)
    return fallback()
