"""
DXF Parser Service for CAD Hub
Reads raw DXF text with ezdxf and flattens it into the generic document
structure (entity field bags, layer declarations, header) consumed by the
analysis engine.
"""
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import ezdxf
from ezdxf import recover
from ezdxf.document import Drawing
from ezdxf.entities import DXFEntity
from ezdxf.lldxf.const import DXFError

logger = logging.getLogger(__name__)


# ezdxf raises these besides DXFError on damaged input
READ_ERRORS = (DXFError, KeyError, ValueError, IndexError, OverflowError, TypeError)


class DXFParseError(Exception):
    """Raised when a document is structurally unreadable."""


def _error_message(error: Exception) -> str:
    return str(error) or type(error).__name__


@dataclass(frozen=True)
class RawEntity:
    """One entity as the parser sees it: a type tag plus a loose field bag."""
    type: str
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RawLayer:
    """Layer table declaration"""
    name: str
    color: Optional[int] = None
    flags: int = 0
    linetype: Optional[str] = None


@dataclass(frozen=True)
class ParsedDocument:
    """Generic parse result"""
    entities: tuple[RawEntity, ...] = ()
    layers: tuple[RawLayer, ...] = ()
    header: dict = field(default_factory=dict)


class DXFParserService:
    """
    Service for parsing DXF text into a ParsedDocument.

    Usage:
        parser = DXFParserService()
        document = parser.parse(dxf_text)

        for raw in document.entities:
            print(raw.type, raw.fields.get("layer"))

    With ``recover_mode=True`` a read error triggers a second attempt
    through ``ezdxf.recover``, which repairs many damaged files.
    """

    # Unit codes to names
    UNITS = {
        0: "Unitless",
        1: "Inches",
        2: "Feet",
        3: "Miles",
        4: "Millimeters",
        5: "Centimeters",
        6: "Meters",
        7: "Kilometers",
        8: "Microinches",
        9: "Mils",
        10: "Yards",
        11: "Angstroms",
        12: "Nanometers",
        13: "Microns",
        14: "Decimeters",
        15: "Decameters",
        16: "Hectometers",
        17: "Gigameters",
        18: "Astronomical units",
        19: "Light years",
        20: "Parsecs"
    }

    def __init__(self, recover_mode: bool = False):
        self.recover_mode = recover_mode

    def parse(self, raw_text: str) -> ParsedDocument:
        """Parse DXF text. Raises DXFParseError if the document is unreadable."""
        doc = self._read(raw_text)

        entities = tuple(self._raw_entity(entity) for entity in doc.modelspace())
        layers = tuple(self._raw_layer(layer) for layer in doc.layers)

        logger.debug(f"Parsed {len(entities)} entities, {len(layers)} layer declarations")
        return ParsedDocument(
            entities=entities,
            layers=layers,
            header=self._header(doc),
        )

    def _read(self, raw_text: str) -> Drawing:
        try:
            return ezdxf.read(io.StringIO(raw_text))
        except READ_ERRORS as e:
            if not self.recover_mode:
                raise DXFParseError(_error_message(e)) from e
            logger.warning(f"DXF read error, trying recovery mode: {e!r}")

        try:
            doc, auditor = recover.read(io.BytesIO(raw_text.encode("utf-8")))
        except READ_ERRORS as e:
            raise DXFParseError(_error_message(e)) from e

        if auditor.has_errors:
            logger.warning(f"Recovered DXF still has {len(auditor.errors)} errors")
        return doc

    def _raw_entity(self, entity: DXFEntity) -> RawEntity:
        """Flatten a single ezdxf entity into a field bag."""
        entity_type = entity.dxftype()
        fields = dict(entity.dxf.all_existing_dxf_attribs())

        try:
            if entity_type == "LWPOLYLINE":
                fields["vertices"] = [tuple(p) for p in entity.get_points("xy")]
                fields["closed"] = entity.closed

            elif entity_type == "POLYLINE":
                fields["vertices"] = [tuple(v.dxf.location) for v in entity.vertices]
                fields["closed"] = entity.is_closed

            elif entity_type == "MTEXT":
                fields["text"] = entity.plain_text()

        except (AttributeError, TypeError, ValueError) as e:
            logger.debug(f"Could not read {entity_type} geometry: {e}")

        return RawEntity(type=entity_type, fields=fields)

    def _raw_layer(self, layer) -> RawLayer:
        # ezdxf stores "off" as a negative color, the index itself is positive
        color = layer.dxf.get("color")
        return RawLayer(
            name=layer.dxf.name,
            color=abs(color) if color is not None else None,
            flags=layer.dxf.get("flags", 0),
            linetype=layer.dxf.get("linetype"),
        )

    def _header(self, doc: Drawing) -> dict:
        units_code = doc.header.get("$INSUNITS", 0)
        header = {
            "dxf_version": doc.dxfversion,
            "units": self.UNITS.get(units_code, "Unknown"),
        }
        for var in ("$EXTMIN", "$EXTMAX"):
            value = doc.header.get(var)
            if value is not None:
                header[var[1:].lower()] = tuple(value)
        return header
