"""
DXF Analyzer Data Models

Typed entities, layers, bounds and statistics produced by the analysis
engine. All models are frozen; ``to_dict()`` returns JSON-ready data for
the viewer and the information panel.
"""

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Mapping, Optional


DEFAULT_LAYER = "0"
DEFAULT_LAYER_COLOR = 7  # white/black
UNKNOWN_TYPE = "UNKNOWN"


class EntityKind(str, Enum):
    """Entity types with a typed payload."""
    LINE = "LINE"
    CIRCLE = "CIRCLE"
    ARC = "ARC"
    POLYLINE = "POLYLINE"
    TEXT = "TEXT"


@dataclass(frozen=True)
class Point2:
    """2D point"""
    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


# ============================================================================
# ENTITIES
# ============================================================================

@dataclass(frozen=True, kw_only=True)
class Entity:
    """
    Common base of all drawing primitives.

    Subclasses carry only the payload of their own type; ``kind`` is the
    DXF type name used for the entity-type histogram.
    """
    KIND: ClassVar[str] = UNKNOWN_TYPE

    layer: str = DEFAULT_LAYER
    color: Optional[int] = None
    linetype: Optional[str] = None

    @property
    def kind(self) -> str:
        return self.KIND

    def geometry_dict(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        data = {"type": self.kind, "layer": self.layer}
        if self.color is not None:
            data["color"] = self.color
        if self.linetype is not None:
            data["linetype"] = self.linetype
        data.update(self.geometry_dict())
        return data


def _point_dict(point: Optional[Point2]) -> Optional[dict]:
    return point.to_dict() if point is not None else None


@dataclass(frozen=True, kw_only=True)
class Line(Entity):
    """Line entity"""
    KIND: ClassVar[str] = EntityKind.LINE.value

    start: Optional[Point2] = None
    end: Optional[Point2] = None

    @property
    def length(self) -> Optional[float]:
        if self.start is None or self.end is None:
            return None
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def geometry_dict(self) -> dict:
        return {"start": _point_dict(self.start), "end": _point_dict(self.end)}


@dataclass(frozen=True, kw_only=True)
class _RoundEntity(Entity):
    center: Optional[Point2] = None
    radius: Optional[float] = None

    def geometry_dict(self) -> dict:
        return {"center": _point_dict(self.center), "radius": self.radius}


@dataclass(frozen=True, kw_only=True)
class Circle(_RoundEntity):
    """Circle entity"""
    KIND: ClassVar[str] = EntityKind.CIRCLE.value


@dataclass(frozen=True, kw_only=True)
class Arc(_RoundEntity):
    """Arc entity (bounds use the full circle)"""
    KIND: ClassVar[str] = EntityKind.ARC.value


@dataclass(frozen=True, kw_only=True)
class Polyline(Entity):
    """Polyline entity (LWPOLYLINE, POLYLINE)"""
    KIND: ClassVar[str] = EntityKind.POLYLINE.value

    vertices: tuple[Point2, ...] = ()
    closed: bool = False

    def geometry_dict(self) -> dict:
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "closed": self.closed,
        }


@dataclass(frozen=True, kw_only=True)
class Text(Entity):
    """Text entity (TEXT, MTEXT)"""
    KIND: ClassVar[str] = EntityKind.TEXT.value

    content: str = ""

    def geometry_dict(self) -> dict:
        return {"text": self.content}


@dataclass(frozen=True, kw_only=True)
class Other(Entity):
    """Any entity type without a typed payload; keeps the raw type name."""
    raw_type: str = UNKNOWN_TYPE

    @property
    def kind(self) -> str:
        return self.raw_type


# ============================================================================
# LAYERS, BOUNDS, STATISTICS
# ============================================================================

@dataclass(frozen=True)
class Layer:
    """Layer with visibility flags and live entity count."""
    name: str
    color_index: int = DEFAULT_LAYER_COLOR
    visible: bool = True
    frozen: bool = False
    entity_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box; (0, 0)-(0, 0) when nothing contributed."""
    min: Point2 = field(default_factory=lambda: Point2(0.0, 0.0))
    max: Point2 = field(default_factory=lambda: Point2(0.0, 0.0))

    @classmethod
    def empty(cls) -> "Bounds":
        return cls()

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def center(self) -> Point2:
        return Point2((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)

    def to_dict(self) -> dict:
        return {
            "min": self.min.to_dict(),
            "max": self.max.to_dict(),
            "size": {"width": self.width, "height": self.height},
            "center": self.center.to_dict(),
        }


@dataclass(frozen=True)
class Statistics:
    """Summary numbers for the information panel."""
    total_entities: int
    entity_type_counts: Mapping[str, int]
    layer_count: int
    file_size_label: str

    def __post_init__(self):
        # read-only view over a private copy
        object.__setattr__(self, "entity_type_counts", MappingProxyType(dict(self.entity_type_counts)))

    def sorted_entity_types(self) -> list[tuple[str, int]]:
        """Histogram ordered by count (descending), then by type name."""
        return sorted(self.entity_type_counts.items(), key=lambda item: (-item[1], item[0]))

    def to_dict(self) -> dict:
        return {
            "total_entities": self.total_entities,
            "entity_types": dict(self.entity_type_counts),
            "layer_count": self.layer_count,
            "file_size": self.file_size_label,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Vollständiges Analyse-Ergebnis einer Zeichnung."""
    layers: tuple[Layer, ...]
    entities: tuple[Entity, ...]
    bounds: Bounds
    statistics: Statistics

    def get_layer(self, name: str) -> Optional[Layer]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def to_dict(self) -> dict:
        return {
            "layers": [layer.to_dict() for layer in self.layers],
            "entities": [entity.to_dict() for entity in self.entities],
            "bounds": self.bounds.to_dict(),
            "statistics": self.statistics.to_dict(),
        }
