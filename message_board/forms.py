import re
from typing import Dict, Optional, Union
from urllib.parse import parse_qsl

from pydantic import BaseModel

from .errors import InvalidNumber, MissingField


ANONYMOUS = "anonymous"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class NewMessage(BaseModel):
    username: str = ANONYMOUS
    message: str


class TimeRange(BaseModel):
    before: Optional[int] = None
    after: Optional[int] = None


def _decode_pairs(encoded: Union[bytes, str]) -> Dict[str, str]:
    # parse_qsl rejects non-ASCII bytes
    if isinstance(encoded, bytes):
        encoded = encoded.decode("utf-8", "replace")
    # later duplicates overwrite earlier ones
    return dict(
        parse_qsl(encoded, keep_blank_values=True, encoding="utf-8", errors="replace")
    )


def decode_form(body: bytes) -> NewMessage:
    """
    Build a NewMessage from a form-encoded request body.

    `message` is mandatory; `username` falls back to "anonymous".
    Raises MissingField when `message` is absent.
    """
    form = _decode_pairs(body)
    if "message" not in form:
        raise MissingField("message")
    return NewMessage(
        username=form.get("username", ANONYMOUS),
        message=form["message"],
    )


def _parse_int64(field: str, raw: str) -> int:
    if raw == "":
        raise InvalidNumber(field, raw, "cannot parse integer from empty string")
    if not _INT_RE.fullmatch(raw):
        raise InvalidNumber(field, raw, "invalid digit found in string")
    value = int(raw)
    if value > _INT64_MAX:
        raise InvalidNumber(field, raw, "number too large to fit in target type")
    if value < _INT64_MIN:
        raise InvalidNumber(field, raw, "number too small to fit in target type")
    return value


def parse_time_range(query: str) -> TimeRange:
    """Parse optional `before`/`after` bounds; the first bad field wins."""
    args = _decode_pairs(query)
    bounds: Dict[str, Optional[int]] = {}
    for field in ("before", "after"):
        raw = args.get(field)
        bounds[field] = None if raw is None else _parse_int64(field, raw)
    return TimeRange(**bounds)
