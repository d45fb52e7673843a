"""
Entity Normalizer

Maps the loose per-entity field bags delivered by a parser onto the typed
entity model. Works with the ezdxf adapter as well as with dxf-parser style
JSON (``startPoint``/``endPoint``, vertex dicts).

A bad record never aborts the file: unknown types become ``Other`` and
unreadable geometry is left empty, so the entity still shows up in the
statistics.
"""
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from .analyzer_models import (
    DEFAULT_LAYER,
    UNKNOWN_TYPE,
    Arc,
    Circle,
    Entity,
    EntityKind,
    Line,
    Other,
    Point2,
    Polyline,
    Text,
)
from .dxf_parser import RawEntity

logger = logging.getLogger(__name__)


# Parsers disagree on field names
START_KEYS = ("start", "startPoint", "start_point")
END_KEYS = ("end", "endPoint", "end_point")
CENTER_KEYS = ("center",)
RADIUS_KEYS = ("radius",)
VERTEX_KEYS = ("vertices", "points")
TEXT_KEYS = ("text", "content", "string")
LINETYPE_KEYS = ("linetype", "lineType", "lineTypeName")

KIND_ALIASES = {
    "LINE": EntityKind.LINE,
    "CIRCLE": EntityKind.CIRCLE,
    "ARC": EntityKind.ARC,
    "POLYLINE": EntityKind.POLYLINE,
    "LWPOLYLINE": EntityKind.POLYLINE,
    "TEXT": EntityKind.TEXT,
    "MTEXT": EntityKind.TEXT,
}


def normalize(raw_entities: Iterable) -> tuple[Entity, ...]:
    """Normalize all records; the result has one entity per input record."""
    return tuple(normalize_entity(raw) for raw in raw_entities)


def normalize_entity(raw: Any) -> Entity:
    """Build the typed entity for one RawEntity (or a plain mapping with a ``type`` key)."""
    raw_type, fields = _unpack(raw)
    kind = KIND_ALIASES.get(raw_type.upper())

    common = {
        "layer": _layer_name(fields.get("layer")),
        "color": _color(fields.get("color")),
        "linetype": _optional_str(_first(fields, LINETYPE_KEYS)),
    }

    if kind is EntityKind.LINE:
        return Line(
            start=to_point(_first(fields, START_KEYS)),
            end=to_point(_first(fields, END_KEYS)),
            **common,
        )

    if kind in (EntityKind.CIRCLE, EntityKind.ARC):
        entity_class = Circle if kind is EntityKind.CIRCLE else Arc
        return entity_class(
            center=to_point(_first(fields, CENTER_KEYS)),
            radius=to_float(_first(fields, RADIUS_KEYS)),
            **common,
        )

    if kind is EntityKind.POLYLINE:
        return Polyline(
            vertices=_vertices(_first(fields, VERTEX_KEYS), raw_type),
            closed=bool(fields.get("closed", fields.get("shape", False))),
            **common,
        )

    if kind is EntityKind.TEXT:
        return Text(
            content=_optional_str(_first(fields, TEXT_KEYS)) or "",
            **common,
        )

    return Other(raw_type=raw_type, **common)


# -------------------------------------------------------------------------
# FIELD HELPERS
# -------------------------------------------------------------------------

def to_float(value: Any) -> Optional[float]:
    """Number or numeric string as float, anything else as None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, str)):
        try:
            return float(value)
        except (ValueError, OverflowError):
            return None
    return None


def to_point(value: Any) -> Optional[Point2]:
    """
    Read a 2D point from the shapes parsers hand out.

    Accepts Point2, ezdxf Vec2/Vec3 (anything with ``.x``/``.y``), mappings
    with ``x``/``y`` keys and 2- or 3-element sequences. The z coordinate is
    dropped.
    """
    if value is None:
        return None
    if isinstance(value, Point2):
        return value

    if isinstance(value, Mapping):
        x, y = value.get("x"), value.get("y")
    elif hasattr(value, "x") and hasattr(value, "y"):
        x, y = value.x, value.y
    elif isinstance(value, Sequence) and not isinstance(value, str) and len(value) >= 2:
        x, y = value[0], value[1]
    else:
        return None

    x, y = to_float(x), to_float(y)
    if x is None or y is None:
        return None
    return Point2(x, y)


def _unpack(raw: Any) -> tuple[str, Mapping]:
    if isinstance(raw, RawEntity):
        raw_type, fields = raw.type, raw.fields
    elif isinstance(raw, Mapping):
        raw_type, fields = raw.get("type"), raw
    else:
        logger.debug(f"Unreadable entity record: {raw!r}")
        return UNKNOWN_TYPE, {}

    if not isinstance(fields, Mapping):
        fields = {}
    if not isinstance(raw_type, str) or not raw_type:
        raw_type = UNKNOWN_TYPE
    return raw_type, fields


def _first(fields: Mapping, keys: tuple) -> Any:
    for key in keys:
        value = fields.get(key)
        if value is not None:
            return value
    return None


def _layer_name(value: Any) -> str:
    if value is None or value == "":
        return DEFAULT_LAYER
    return str(value)


def _color(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _vertices(value: Any, raw_type: str) -> tuple[Point2, ...]:
    if not isinstance(value, Iterable) or isinstance(value, (str, Mapping)):
        return ()

    points = []
    skipped = 0
    for vertex in value:
        point = to_point(vertex)
        if point is None:
            skipped += 1
        else:
            points.append(point)

    if skipped:
        logger.debug(f"Skipped {skipped} unreadable vertices of {raw_type}")
    return tuple(points)
