"""
Statistics Aggregator
"""
from collections import Counter
from collections.abc import Sequence

from .analyzer_models import Entity, Layer, Statistics

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(num_bytes: int) -> str:
    """Human readable size, base 1024, one decimal place ("2.0 KB")."""
    if num_bytes < 0:
        raise ValueError(f"Byte length must not be negative: {num_bytes}")
    if num_bytes == 0:
        return "0 B"

    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.1f} {SIZE_UNITS[unit]}"


def count_entity_types(entities: Sequence[Entity]) -> dict[str, int]:
    """Histogram by entity kind; unknown types keep their own raw name."""
    return dict(Counter(entity.kind for entity in entities))


def aggregate(entities: Sequence[Entity], layers: Sequence[Layer], raw_byte_length: int) -> Statistics:
    return Statistics(
        total_entities=len(entities),
        entity_type_counts=count_entity_types(entities),
        layer_count=len(layers),
        file_size_label=format_file_size(raw_byte_length),
    )
