"""Mini README: Canonical timestamp handling.

Structure:
    * parse_timestamp - accept ISO-8601 text carrying an offset.
    * normalise - convert to UTC truncated to whole milliseconds.
    * format_timestamp - render the canonical ``YYYY-MM-DDTHH:MM:SS.mmmZ`` form.

BSON dates store milliseconds in UTC, so truncating on the way in is what
lets a submitted value come back unchanged from the database.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import InvalidInput


def normalise(moment: datetime) -> datetime:
    """Return ``moment`` in UTC with sub-millisecond precision removed.

    Naive values are interpreted as UTC; they only arrive from storage
    drivers that decode BSON dates without attaching a zone.
    """

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.replace(microsecond=moment.microsecond - moment.microsecond % 1000)


def parse_timestamp(value: object) -> datetime:
    """Parse client supplied timestamps, rejecting naive local times."""

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as error:
            raise InvalidInput(f"invalid date format: {value!r}") from error
    else:
        raise InvalidInput("dateTime must be an ISO-8601 string")

    if moment.tzinfo is None or moment.utcoffset() is None:
        raise InvalidInput(
            f"invalid date format: {value!r} has no UTC offset; send an absolute timestamp"
        )
    try:
        return normalise(moment)
    except OverflowError as error:
        raise InvalidInput(f"invalid date format: {value!r} is out of range") from error


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp in the canonical interchange format."""

    return normalise(moment).isoformat(timespec="milliseconds").replace("+00:00", "Z")
