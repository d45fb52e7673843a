"""
Layer Analyzer

Builds the layer list of a drawing from the layer table and the
normalized entities.
"""
import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any, Optional

from .analyzer_models import DEFAULT_LAYER, DEFAULT_LAYER_COLOR, Entity, Layer
from .dxf_parser import RawLayer

logger = logging.getLogger(__name__)

# Bits of the layer flag word (group code 70)
FLAG_HIDDEN = 1
FLAG_FROZEN = 4


def analyze_layers(layer_table: Iterable, entities: Sequence[Entity]) -> tuple[Layer, ...]:
    """
    Merge layer declarations with live entity counts.

    The default layer "0" is always part of the result; when the table does
    not declare it, it is appended after the declared layers. A later
    declaration of the same name replaces the earlier one in place.

    Entities on a layer that is not declared (and is not "0") are not
    counted on any layer and no layer is created for them.
    """
    layers: dict[str, Layer] = {}
    for declaration in layer_table:
        layer = layer_from_declaration(declaration)
        if layer is None:
            logger.debug(f"Skipping layer declaration without name: {declaration!r}")
            continue
        layers[layer.name] = layer

    if DEFAULT_LAYER not in layers:
        layers[DEFAULT_LAYER] = Layer(name=DEFAULT_LAYER)

    counts = Counter(entity.layer for entity in entities)
    return tuple(
        replace(layer, entity_count=counts.get(name, 0))
        for name, layer in layers.items()
    )


def layer_from_declaration(declaration: Any) -> Optional[Layer]:
    """Decode one RawLayer (or dxf-parser style mapping) into a Layer."""
    if isinstance(declaration, RawLayer):
        name, color, flags = declaration.name, declaration.color, declaration.flags
    elif isinstance(declaration, Mapping):
        name = declaration.get("name")
        color = declaration.get("color")
        flags = declaration.get("flags")
    else:
        return None

    if name is None or name == "":
        return None

    flags = flags if isinstance(flags, int) and not isinstance(flags, bool) else 0
    if not isinstance(color, int) or isinstance(color, bool) or color == 0:
        color = DEFAULT_LAYER_COLOR

    return Layer(
        name=str(name),
        color_index=color,
        visible=not flags & FLAG_HIDDEN,
        frozen=bool(flags & FLAG_FROZEN),
    )
