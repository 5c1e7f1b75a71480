# spatialrules/countries.py
# Built-in country rules. Ids are ISO 3166-1 alpha-3 codes so they match the
# default "ISO_A3" feature property.

from __future__ import annotations
from typing import Any

from .rules import SpatialRule, register_rule_type


@register_rule_type
class GermanySpatialRule(SpatialRule):
    """Motorways have no general speed limit."""

    def __init__(self) -> None:
        super().__init__("DEU")

    def get_max_speed(self, highway: str, default: float) -> float:
        if highway == "motorway":
            return float("inf")
        return default


@register_rule_type
class AustriaSpatialRule(SpatialRule):
    """Tracks and living streets are closed to motor vehicles."""

    NO_MOTOR_ACCESS = ("track", "living_street")
    MOTOR_VEHICLES = ("motorcar", "motorcycle")

    def __init__(self) -> None:
        super().__init__("AUT")

    def get_access(self, highway: str, transport: str, default: Any) -> Any:
        if highway in self.NO_MOTOR_ACCESS and transport in self.MOTOR_VEHICLES:
            return False
        return default
