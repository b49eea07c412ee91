"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

EVENT_TYPE = "SwitchBotSensor"


@dataclass(frozen=True, slots=True)
class SensorReading:
    """The normalized measurement extracted from a SwitchBot status envelope."""

    device_id: str
    temperature: float
    humidity: int
    battery: int

    def to_event(self) -> Dict[str, Any]:
        """Custom event attributes, keyed the way the SwitchBot API names them."""
        return {
            "deviceId": self.device_id,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "battery": self.battery,
        }
