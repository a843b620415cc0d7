"""Focused tests for the dash datagram decoder."""

from __future__ import annotations

import dataclasses
import json
import math
import struct

import pytest

from forza_dash import DATAGRAM_SIZE, FIELD_NAMES, DashDatagram, TruncatedInput, decode
from forza_dash.ingestion.dash import DASH_LAYOUT, DecodeResult, WheelQuad
from tests.helpers import DASH_STRUCT, build_dash_values, pack_dash_payload


def test_datagram_size_matches_wire_layout() -> None:
    assert DATAGRAM_SIZE == 331
    assert DASH_STRUCT.size == DATAGRAM_SIZE
    assert len(DASH_LAYOUT) == 90


def test_dataclass_fields_follow_wire_order() -> None:
    names = tuple(field.name for field in dataclasses.fields(DashDatagram))

    assert names == FIELD_NAMES


def test_decode_populates_every_field_from_literal_fixture(
    dash_values: dict[str, int | float], dash_payload: bytes
) -> None:
    result = decode(dash_payload)

    assert result.ok
    assert result.error is None
    assert result.datagram is not None
    assert result.datagram.to_dict() == dash_values


@pytest.mark.parametrize(
    ("offset", "fmt", "field"),
    [
        (0, "<i", "is_race_on"),
        (4, "<I", "timestamp_ms"),
        (68, "<f", "normalized_suspension_travel_front_left"),
        (116, "<i", "wheel_on_rumble_strip_front_left"),
        (212, "<i", "car_ordinal"),
        (244, "<f", "speed"),
        (256, "<f", "tire_temp_front_left"),
        (300, "<H", "lap_number"),
        (302, "<B", "race_position"),
        (307, "<B", "gear"),
        (308, "<b", "steer"),
        (310, "<b", "normalized_aibrake_difference"),
        (311, "<f", "tire_wear_front_left"),
        (327, "<i", "track_ordinal"),
    ],
)
def test_fields_are_read_from_documented_offsets(
    dash_payload: bytes, offset: int, fmt: str, field: str
) -> None:
    (expected,) = struct.unpack_from(fmt, dash_payload, offset)

    datagram = DashDatagram.from_bytes(dash_payload)

    assert getattr(datagram, field) == expected


def test_unsigned_and_signed_fields_keep_their_range() -> None:
    payload = pack_dash_payload(
        timestamp_ms=0xFFFFFFFF,
        lap_number=0xFFFF,
        gear=255,
        steer=-127,
        normalized_driving_line=127,
        is_race_on=-1,
    )

    datagram = DashDatagram.from_bytes(payload)

    assert datagram.timestamp_ms == 0xFFFFFFFF
    assert datagram.lap_number == 0xFFFF
    assert datagram.gear == 255
    assert datagram.steer == -127
    assert datagram.normalized_driving_line == 127
    assert datagram.is_race_on == -1


def test_every_short_buffer_fails_with_truncated_input(dash_payload: bytes) -> None:
    for length in range(DATAGRAM_SIZE):
        result = decode(dash_payload[:length])

        assert not result.ok, length
        assert result.datagram is None
        assert isinstance(result.error, TruncatedInput)
        assert result.error.offset <= length
        assert result.error.available < result.error.required


def test_truncation_reports_first_failing_field(dash_payload: bytes) -> None:
    result = decode(dash_payload[:245])

    assert result.error is not None
    # speed starts at 244, so only one of its four bytes is present.
    assert (result.error.offset, result.error.required, result.error.available) == (244, 4, 1)


def test_from_bytes_raises_truncated_input() -> None:
    with pytest.raises(TruncatedInput):
        DashDatagram.from_bytes(b"\x00" * (DATAGRAM_SIZE - 1))


def test_unwrap_raises_stored_error() -> None:
    result = decode(b"")

    with pytest.raises(TruncatedInput) as excinfo:
        result.unwrap()
    assert excinfo.value is result.error


def test_unwrap_of_empty_result_raises_value_error() -> None:
    with pytest.raises(ValueError, match="empty DecodeResult"):
        DecodeResult().unwrap()


def test_all_zero_buffer_decodes_to_zero_fields() -> None:
    datagram = DashDatagram.from_bytes(bytes(DATAGRAM_SIZE))

    assert all(value == 0 for value in datagram.to_dict().values())


def test_garbage_of_sufficient_length_is_accepted() -> None:
    datagram = DashDatagram.from_bytes(b"\xff" * DATAGRAM_SIZE)

    assert datagram.is_race_on == -1
    assert datagram.timestamp_ms == 0xFFFFFFFF
    assert math.isnan(datagram.speed)
    assert datagram.steer == -1
    assert datagram.gear == 255


def test_trailing_bytes_are_ignored(dash_payload: bytes) -> None:
    padded = dash_payload + b"\x13\x37" * 7

    assert DashDatagram.from_bytes(padded) == DashDatagram.from_bytes(dash_payload)


def test_speed_conversions() -> None:
    datagram = DashDatagram.from_bytes(pack_dash_payload(speed=10.0))

    assert datagram.get_speed_by_kmh() == 36.0
    assert datagram.get_speed_by_mph() == 22.369


def test_wheel_views_group_fields_in_wire_order(dash_values: dict[str, int | float]) -> None:
    datagram = DashDatagram.from_bytes(pack_dash_payload(dash_values))

    assert datagram.tire_temp == WheelQuad(
        dash_values["tire_temp_front_left"],
        dash_values["tire_temp_front_right"],
        dash_values["tire_temp_rear_left"],
        dash_values["tire_temp_rear_right"],
    )
    assert datagram.wheel_on_rumble_strip.rear_right == dash_values[
        "wheel_on_rumble_strip_rear_right"
    ]
    assert datagram.tire_wear.front_right == dash_values["tire_wear_front_right"]


def test_datagram_is_immutable(dash_payload: bytes) -> None:
    datagram = DashDatagram.from_bytes(dash_payload)

    with pytest.raises(dataclasses.FrozenInstanceError):
        datagram.speed = 0.0  # type: ignore[misc]


def test_to_json_exposes_every_field_in_wire_order(dash_payload: bytes) -> None:
    datagram = DashDatagram.from_bytes(dash_payload)

    payload = json.loads(datagram.to_json())

    assert tuple(payload) == FIELD_NAMES
    assert DashDatagram.from_dict(payload) == datagram


def test_from_dict_rejects_missing_and_unknown_keys() -> None:
    values = build_dash_values()
    values.pop("speed")
    values["speed_kmh"] = 1.0

    with pytest.raises(ValueError, match="speed"):
        DashDatagram.from_dict(values)
