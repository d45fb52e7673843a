"""
Bounds Calculator

Axis-aligned bounding box over the normalized entities.
"""
from collections.abc import Iterable

from ezdxf.math import BoundingBox2d

from .analyzer_models import Arc, Bounds, Circle, Entity, Line, Point2, Polyline


def bound_points(entity: Entity) -> tuple[Point2, ...]:
    """
    Points an entity contributes to the bounding box.

    Circles and arcs contribute the corners of the circumscribing square;
    arcs deliberately use the full circle. Texts and unknown types
    contribute nothing.
    """
    if isinstance(entity, Line):
        return tuple(p for p in (entity.start, entity.end) if p is not None)

    if isinstance(entity, (Circle, Arc)):
        center, r = entity.center, entity.radius
        if center is None or r is None:
            return ()
        return (
            Point2(center.x - r, center.y - r),
            Point2(center.x + r, center.y + r),
        )

    if isinstance(entity, Polyline):
        return entity.vertices

    return ()


def compute_bounds(entities: Iterable[Entity]) -> Bounds:
    """Bounding box of all finite contributing points, (0, 0)-(0, 0) if none."""
    bbox = BoundingBox2d()

    for entity in entities:
        points = [(p.x, p.y) for p in bound_points(entity) if p.is_finite()]
        if points:
            bbox.extend(points)

    if not bbox.has_data:
        return Bounds.empty()

    return Bounds(
        min=Point2(bbox.extmin.x, bbox.extmin.y),
        max=Point2(bbox.extmax.x, bbox.extmax.y),
    )
