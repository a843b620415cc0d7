"""Example that decodes a synthetic dash capture and exports it to CSV."""

from __future__ import annotations

import numpy as np

from forza_dash import decode
from forza_dash.ingestion.capture import DASH_DTYPE, decode_array
from forza_dash.io import array_to_frame


def build_capture(samples: int = 5) -> bytes:
    frames = np.zeros(samples, dtype=DASH_DTYPE)
    frames["is_race_on"] = 1
    frames["timestamp_ms"] = np.arange(samples) * 16
    frames["speed"] = np.linspace(20.0, 24.0, samples)
    frames["current_engine_rpm"] = np.linspace(6500.0, 7100.0, samples)
    frames["gear"] = 4
    return frames.tobytes()


def main() -> None:
    capture = build_capture()
    first = decode(capture).unwrap()
    print(f"first packet: {first.get_speed_by_kmh():.1f} km/h at {first.current_engine_rpm:.0f} rpm")
    frame = array_to_frame(decode_array(capture))
    print(frame[["timestamp_ms", "gear", "current_engine_rpm", "speed_kmh"]].to_csv(index=False))


if __name__ == "__main__":
    main()
