"""Decoder for the racing-simulation "dash" telemetry datagram.

The dash packet is a flat little-endian structure with no header, version
or checksum.  :data:`DASH_LAYOUT` lists every field in wire order together
with its primitive kind; :func:`decode` walks that layout with a single
:class:`~forza_dash.ingestion._cursor.ByteCursor` and either returns a fully
populated :class:`DashDatagram` or the :class:`TruncatedInput` raised by the
first short read.  Bytes beyond :data:`DATAGRAM_SIZE` are ignored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
import logging
from typing import Any, Callable, Mapping, NamedTuple, Optional, Union

from forza_dash.ingestion._cursor import PRIMITIVE_WIDTHS, ByteCursor, TruncatedInput

__all__ = [
    "DASH_LAYOUT",
    "DATAGRAM_SIZE",
    "FIELD_NAMES",
    "KMH_PER_MPS",
    "MPH_PER_MPS",
    "WHEEL_POSITIONS",
    "DashDatagram",
    "DecodeResult",
    "TruncatedInput",
    "WheelQuad",
    "decode",
]


logger = logging.getLogger(__name__)


KMH_PER_MPS = 3.6
MPH_PER_MPS = 2.2369

WHEEL_POSITIONS = ("front_left", "front_right", "rear_left", "rear_right")
_AXES = ("x", "y", "z")


def _per_wheel(prefix: str, kind: str) -> tuple[tuple[str, str], ...]:
    return tuple((f"{prefix}_{wheel}", kind) for wheel in WHEEL_POSITIONS)


def _per_axis(prefix: str, kind: str) -> tuple[tuple[str, str], ...]:
    return tuple((f"{prefix}_{axis}", kind) for axis in _AXES)


DASH_LAYOUT: tuple[tuple[str, str], ...] = (
    ("is_race_on", "i32"),
    ("timestamp_ms", "u32"),
    ("engine_max_rpm", "f32"),
    ("engine_idle_rpm", "f32"),
    ("current_engine_rpm", "f32"),
    *_per_axis("acceleration", "f32"),
    *_per_axis("velocity", "f32"),
    *_per_axis("angular_velocity", "f32"),
    ("yaw", "f32"),
    ("pitch", "f32"),
    ("roll", "f32"),
    *_per_wheel("normalized_suspension_travel", "f32"),
    *_per_wheel("tire_slip_ratio", "f32"),
    *_per_wheel("wheel_rotation_speed", "f32"),
    *_per_wheel("wheel_on_rumble_strip", "i32"),
    *_per_wheel("wheel_in_puddle_depth", "f32"),
    *_per_wheel("surface_rumble", "f32"),
    *_per_wheel("tire_slip_angle", "f32"),
    *_per_wheel("tire_combined_slip", "f32"),
    *_per_wheel("suspension_travel_meters", "f32"),
    ("car_ordinal", "i32"),
    ("car_class", "i32"),
    ("car_performance_index", "i32"),
    ("drivetrain_type", "i32"),
    ("num_cylinders", "i32"),
    *_per_axis("position", "f32"),
    ("speed", "f32"),
    ("power", "f32"),
    ("torque", "f32"),
    *_per_wheel("tire_temp", "f32"),
    ("boost", "f32"),
    ("fuel", "f32"),
    ("distance_traveled", "f32"),
    ("best_lap", "f32"),
    ("last_lap", "f32"),
    ("current_lap", "f32"),
    ("current_race_time", "f32"),
    ("lap_number", "u16"),
    ("race_position", "u8"),
    ("accel", "u8"),
    ("brake", "u8"),
    ("clutch", "u8"),
    ("hand_brake", "u8"),
    ("gear", "u8"),
    ("steer", "i8"),
    ("normalized_driving_line", "i8"),
    ("normalized_aibrake_difference", "i8"),
    *_per_wheel("tire_wear", "f32"),
    ("track_ordinal", "i32"),
)

FIELD_NAMES: tuple[str, ...] = tuple(name for name, _ in DASH_LAYOUT)
DATAGRAM_SIZE = sum(PRIMITIVE_WIDTHS[kind] for _, kind in DASH_LAYOUT)

_COERCE: Mapping[str, Callable[[Any], Union[int, float]]] = {
    "i32": int,
    "u32": int,
    "f32": float,
    "u16": int,
    "u8": int,
    "i8": int,
}


class WheelQuad(NamedTuple):
    """Per-wheel values in wire order."""

    front_left: Any
    front_right: Any
    rear_left: Any
    rear_right: Any


def _wheel_view(prefix: str, doc: str) -> property:
    names = tuple(f"{prefix}_{wheel}" for wheel in WHEEL_POSITIONS)

    def _getter(self: "DashDatagram") -> WheelQuad:
        return WheelQuad(*(getattr(self, name) for name in names))

    return property(_getter, doc=doc)


@dataclass(frozen=True)
class DashDatagram:
    """Representation of a decoded dash datagram.

    Vectors are expressed in the car's local space (X = right, Y = up,
    Z = forward).  Speed is in metres per second, power in watts, torque in
    newton metres, lap times in seconds and tyre temperatures in Fahrenheit.
    """

    is_race_on: int
    timestamp_ms: int
    engine_max_rpm: float
    engine_idle_rpm: float
    current_engine_rpm: float
    acceleration_x: float
    acceleration_y: float
    acceleration_z: float
    velocity_x: float
    velocity_y: float
    velocity_z: float
    angular_velocity_x: float
    angular_velocity_y: float
    angular_velocity_z: float
    yaw: float
    pitch: float
    roll: float
    # 0.0 = max stretch, 1.0 = max compression
    normalized_suspension_travel_front_left: float
    normalized_suspension_travel_front_right: float
    normalized_suspension_travel_rear_left: float
    normalized_suspension_travel_rear_right: float
    # 0 means full grip, |ratio| > 1.0 means loss of grip
    tire_slip_ratio_front_left: float
    tire_slip_ratio_front_right: float
    tire_slip_ratio_rear_left: float
    tire_slip_ratio_rear_right: float
    # radians per second
    wheel_rotation_speed_front_left: float
    wheel_rotation_speed_front_right: float
    wheel_rotation_speed_rear_left: float
    wheel_rotation_speed_rear_right: float
    wheel_on_rumble_strip_front_left: int
    wheel_on_rumble_strip_front_right: int
    wheel_on_rumble_strip_rear_left: int
    wheel_on_rumble_strip_rear_right: int
    wheel_in_puddle_depth_front_left: float
    wheel_in_puddle_depth_front_right: float
    wheel_in_puddle_depth_rear_left: float
    wheel_in_puddle_depth_rear_right: float
    surface_rumble_front_left: float
    surface_rumble_front_right: float
    surface_rumble_rear_left: float
    surface_rumble_rear_right: float
    tire_slip_angle_front_left: float
    tire_slip_angle_front_right: float
    tire_slip_angle_rear_left: float
    tire_slip_angle_rear_right: float
    tire_combined_slip_front_left: float
    tire_combined_slip_front_right: float
    tire_combined_slip_rear_left: float
    tire_combined_slip_rear_right: float
    suspension_travel_meters_front_left: float
    suspension_travel_meters_front_right: float
    suspension_travel_meters_rear_left: float
    suspension_travel_meters_rear_right: float
    car_ordinal: int
    # 0 (D) to 7 (X)
    car_class: int
    # 100 to 999
    car_performance_index: int
    # 0 = FWD, 1 = RWD, 2 = AWD
    drivetrain_type: int
    num_cylinders: int
    position_x: float
    position_y: float
    position_z: float
    speed: float
    power: float
    torque: float
    tire_temp_front_left: float
    tire_temp_front_right: float
    tire_temp_rear_left: float
    tire_temp_rear_right: float
    boost: float
    fuel: float
    distance_traveled: float
    best_lap: float
    last_lap: float
    current_lap: float
    current_race_time: float
    # 0 is the first lap
    lap_number: int
    race_position: int
    accel: int
    brake: int
    clutch: int
    hand_brake: int
    gear: int
    steer: int
    normalized_driving_line: int
    normalized_aibrake_difference: int
    tire_wear_front_left: float
    tire_wear_front_right: float
    tire_wear_rear_left: float
    tire_wear_rear_right: float
    track_ordinal: int

    normalized_suspension_travel = _wheel_view(
        "normalized_suspension_travel", "Normalised suspension travel per wheel."
    )
    tire_slip_ratio = _wheel_view("tire_slip_ratio", "Tyre slip ratio per wheel.")
    wheel_rotation_speed = _wheel_view("wheel_rotation_speed", "Wheel rotation speed per wheel.")
    wheel_on_rumble_strip = _wheel_view("wheel_on_rumble_strip", "Rumble strip contact per wheel.")
    wheel_in_puddle_depth = _wheel_view("wheel_in_puddle_depth", "Puddle depth per wheel.")
    surface_rumble = _wheel_view("surface_rumble", "Surface rumble per wheel.")
    tire_slip_angle = _wheel_view("tire_slip_angle", "Tyre slip angle per wheel.")
    tire_combined_slip = _wheel_view("tire_combined_slip", "Tyre combined slip per wheel.")
    suspension_travel_meters = _wheel_view(
        "suspension_travel_meters", "Suspension travel in metres per wheel."
    )
    tire_temp = _wheel_view("tire_temp", "Tyre temperature per wheel.")
    tire_wear = _wheel_view("tire_wear", "Tyre wear per wheel.")

    @classmethod
    def from_bytes(cls, payload: bytes | bytearray | memoryview) -> "DashDatagram":
        """Decode ``payload`` or raise :class:`TruncatedInput`."""

        return decode(payload).unwrap()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DashDatagram":
        missing = [name for name in FIELD_NAMES if name not in payload]
        unknown = sorted(set(payload) - set(FIELD_NAMES))
        if missing or unknown:
            raise ValueError(
                f"Dash datagram mapping mismatch (missing={missing}, unknown={unknown})"
            )
        return cls.from_record(payload)

    @classmethod
    def from_record(cls, record: Any) -> "DashDatagram":
        """Build a datagram from any object indexable by field name.

        Structured :mod:`numpy` rows, :mod:`pandas` rows and plain mappings are
        all accepted; values are coerced to Python ``int``/``float``.
        """

        return cls(*(_COERCE[kind](record[name]) for name, kind in DASH_LAYOUT))

    def get_speed_by_kmh(self) -> float:
        return self.speed * KMH_PER_MPS

    def get_speed_by_mph(self) -> float:
        return self.speed * MPH_PER_MPS

    def to_dict(self) -> dict[str, int | float]:
        return asdict(self)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :func:`decode`: either a datagram or the truncation error."""

    datagram: Optional[DashDatagram] = None
    error: Optional[TruncatedInput] = None

    @property
    def ok(self) -> bool:
        return self.datagram is not None

    def unwrap(self) -> DashDatagram:
        if self.datagram is None:
            if self.error is None:
                raise ValueError("empty DecodeResult")
            raise self.error
        return self.datagram


def decode(buffer: bytes | bytearray | memoryview) -> DecodeResult:
    """Decode one dash datagram from the start of ``buffer``."""

    cursor = ByteCursor(buffer)
    try:
        values = [cursor.read(kind) for _, kind in DASH_LAYOUT]
    except TruncatedInput as exc:
        logger.debug(
            "Dash datagram truncated.",
            extra={
                "event": "dash.truncated",
                "offset": exc.offset,
                "required": exc.required,
                "available": exc.available,
                "expected_size": DATAGRAM_SIZE,
            },
        )
        return DecodeResult(error=exc)
    return DecodeResult(datagram=DashDatagram(*values))
