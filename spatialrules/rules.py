# spatialrules/rules.py
# Spatial rules and the rule type registry.
#
# A SpatialRule is a plain data object: an id plus the polygons ("borders")
# of the area it governs. "No applicable rule" is expressed as None.
#
# Named rule types are looked up in an explicit registration table instead
# of being imported by name at runtime. Keys are fully qualified names
# ("<module>.<ClassName>"); short names are expanded against
# DEFAULT_NAMESPACE.

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from .geometry import Polygon

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "spatialrules.countries"

RuleType = Callable[[], "SpatialRule"]

_RULE_TYPES: Dict[str, RuleType] = {}


class SpatialRule:
    """
    A rule that applies inside its borders.

    Subclasses override the routing hooks; the base class returns the
    caller's defaults unchanged.
    """

    def __init__(self, id: str, borders: Optional[Sequence[Polygon]] = None) -> None:
        self.id = id
        self.borders: List[Polygon] = list(borders) if borders is not None else []

    def set_borders(self, borders: Sequence[Polygon]) -> "SpatialRule":
        self.borders = list(borders)
        return self

    def contains(self, lat: float, lon: float) -> bool:
        return any(p.contains(lat, lon) for p in self.borders)

    # ------------------------- Routing hooks -------------------------

    def get_max_speed(self, highway: str, default: float) -> float:
        return default

    def get_access(self, highway: str, transport: str, default: Any) -> Any:
        return default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpatialRule):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, borders={len(self.borders)})"


# ------------------------- Registry -------------------------

def qualified_name(obj: Any) -> str:
    return f"{obj.__module__}.{obj.__qualname__}"


def register_rule_type(rule_type: Optional[RuleType] = None, *, name: Optional[str] = None):
    """
    Register a zero-argument callable (usually a SpatialRule subclass) that
    produces a rule. Works as a plain call or as a class decorator:

        @register_rule_type
        class MySpatialRule(SpatialRule): ...

        register_rule_type(make_rule, name="myapp.rules.Custom")
    """
    def _register(rt: RuleType) -> RuleType:
        key = name or qualified_name(rt)
        _RULE_TYPES[key] = rt
        logger.debug("Registered rule type %s", key)
        return rt

    if rule_type is None:
        return _register
    return _register(rule_type)


def unregister_rule_type(name: str) -> None:
    _RULE_TYPES.pop(expand_rule_name(name), None)


def registered_rule_types() -> List[str]:
    _load_builtin_rules()
    return sorted(_RULE_TYPES)


def expand_rule_name(name: str) -> str:
    name = name.strip()
    if "." not in name:
        return f"{DEFAULT_NAMESPACE}.{name}"
    return name


def resolve_rule_type(name: str) -> SpatialRule:
    """
    Instantiate the rule registered under `name`.
    Raises ValueError if the name is unknown or does not produce a SpatialRule.
    """
    _load_builtin_rules()
    key = expand_rule_name(name)
    rule_type = _RULE_TYPES.get(key)
    if rule_type is None:
        msg = f"Cannot find SpatialRule for rule {key}"
        logger.error(msg)
        raise ValueError(msg)
    rule = rule_type()
    if not isinstance(rule, SpatialRule):
        msg = f"Cannot find SpatialRule for rule {key} but found {type(rule).__name__}"
        logger.error(msg)
        raise ValueError(msg)
    return rule


def _load_builtin_rules() -> None:
    # Registration happens on import of the countries module
    from . import countries  # noqa: F401
