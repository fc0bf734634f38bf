"""
Decoding of NP6-905-CD (15-minute settlement point price) report rows.

The API returns rows either as positional arrays::

    ["2026-02-10", 1, 1, "HB_WEST", "HU", -1.39, false]

or as objects with the same field names. Each row decodes to a
``DecodedRow`` or a ``RejectedRow`` naming why it was dropped, so no
malformed value ever reaches the forecast as NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, List, Mapping, Optional, Union

from spp_forecast.domain.entities.time_series import Observation

ROW_FIELDS = (
    "deliveryDate",
    "deliveryHour",
    "deliveryInterval",
    "settlementPoint",
    "settlementPointType",
    "settlementPointPrice",
    "DSTFlag",
)
_MIN_POSITIONAL_FIELDS = 6

HOURS_PER_DAY = 24
INTERVALS_PER_HOUR = 4


@dataclass(frozen=True, slots=True)
class DecodedRow:
    delivery_date: date
    slot: int
    observation: Observation


@dataclass(frozen=True, slots=True)
class RejectedRow:
    reason: str
    row: Any


RowDecodeResult = Union[DecodedRow, RejectedRow]


def extract_rows(payload: Any) -> List[Any]:
    """Pull the row list out of the report envelope."""
    if not isinstance(payload, Mapping):
        return []

    embedded = payload.get("_embedded")
    if not isinstance(embedded, Mapping):
        embedded = {}

    for candidate in (
        payload.get("items"),
        payload.get("data"),
        embedded.get("data"),
        embedded.get("items"),
    ):
        if isinstance(candidate, list):
            return candidate
    return []


def _row_fields(row: Any) -> Optional[Dict[str, Any]]:
    if isinstance(row, (list, tuple)):
        if len(row) < _MIN_POSITIONAL_FIELDS:
            return None
        return dict(zip(ROW_FIELDS, row))
    if isinstance(row, Mapping):
        return dict(row)
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def _as_price(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_date(value: Any) -> Optional[date]:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def decode_spp_row(row: Any, settlement_point: str, tz: tzinfo) -> RowDecodeResult:
    """
    Decode one report row for ``settlement_point``.

    The observation timestamp is the start of the row's 15-minute interval on
    its delivery date, in ``tz``.
    """
    fields = _row_fields(row)
    if fields is None:
        return RejectedRow("malformed", row)

    point = str(fields.get("settlementPoint") or "").strip().upper()
    if point != settlement_point.strip().upper():
        return RejectedRow("settlement_point", row)

    delivery_date = _as_date(fields.get("deliveryDate"))
    if delivery_date is None:
        return RejectedRow("delivery_date", row)

    hour = _as_int(fields.get("deliveryHour"))
    if hour is None or not 1 <= hour <= HOURS_PER_DAY:
        return RejectedRow("hour", row)

    interval = _as_int(fields.get("deliveryInterval"))
    if interval is None or not 1 <= interval <= INTERVALS_PER_HOUR:
        return RejectedRow("interval", row)

    price = _as_price(fields.get("settlementPointPrice"))
    if price is None:
        return RejectedRow("price", row)

    slot = (hour - 1) * INTERVALS_PER_HOUR + (interval - 1)
    timestamp = datetime.combine(
        delivery_date,
        time(hour=slot // INTERVALS_PER_HOUR, minute=(slot % INTERVALS_PER_HOUR) * 15),
        tzinfo=tz,
    )
    return DecodedRow(
        delivery_date=delivery_date,
        slot=slot,
        observation=Observation(timestamp=timestamp, value=price),
    )
