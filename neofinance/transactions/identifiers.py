"""Mini README: Two-way mapping between storage and wire identifiers.

MongoDB assigns ``bson.ObjectId`` values; clients only ever see the
24-character lowercase hexadecimal form. Only that exact form is accepted
back, which keeps the mapping one-to-one (``ObjectId`` itself would also
accept upper-case hex).
"""

from __future__ import annotations

import re

from bson import ObjectId

from ..errors import InvalidInput

_EXTERNAL_PATTERN = re.compile(r"[0-9a-f]{24}")


def to_external(identifier: ObjectId) -> str:
    """Render a storage identifier for JSON responses and URLs."""

    return str(identifier)


def from_external(text: object) -> ObjectId:
    """Parse a wire identifier, raising ``InvalidInput`` for malformed text."""

    if not isinstance(text, str) or not text:
        raise InvalidInput("missing transaction ID")
    if not _EXTERNAL_PATTERN.fullmatch(text):
        raise InvalidInput("invalid ID format")
    return ObjectId(text)
