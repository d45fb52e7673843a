import io

import ezdxf
import pytest

from apps.dxf.services.analyzer import ParsedDocument, RawEntity, RawLayer


class FakeParser:
    """Parser stand-in returning a fixed document or raising a fixed error."""

    def __init__(self, document=None, error=None):
        self.document = document or ParsedDocument()
        self.error = error
        self.calls = 0

    def parse(self, raw_text):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.document


@pytest.fixture
def fake_parser():
    return FakeParser


@pytest.fixture
def minimal_document():
    """One LINE (0,0)-(10,5) on layer L1, L1 declared with flags 0."""
    return ParsedDocument(
        entities=(
            RawEntity("LINE", {"layer": "L1", "start": (0.0, 0.0, 0.0), "end": (10.0, 5.0, 0.0)}),
        ),
        layers=(RawLayer("L1", color=1, flags=0),),
    )


@pytest.fixture
def dxf_text():
    """Serialize an ezdxf document to DXF text."""
    def _write(doc):
        stream = io.StringIO()
        doc.write(stream)
        return stream.getvalue()
    return _write


@pytest.fixture
def shop_drawing(dxf_text):
    """Small part drawing: outline, holes, a slot arc, a label."""
    doc = ezdxf.new(dxfversion="R2010")
    doc.header["$INSUNITS"] = 4
    doc.layers.add("OUTLINE", color=7)
    doc.layers.add("HOLES", color=3)
    doc.layers.add("NOTES", color=2)

    msp = doc.modelspace()
    msp.add_lwpolyline(
        [(0, 0), (200, 0), (200, 100), (0, 100)],
        close=True, dxfattribs={"layer": "OUTLINE"},
    )
    msp.add_circle((30, 50), 10, dxfattribs={"layer": "HOLES"})
    msp.add_circle((170, 50), 10, dxfattribs={"layer": "HOLES"})
    msp.add_arc((100, 50), 20, 0, 180, dxfattribs={"layer": "HOLES"})
    msp.add_line((0, -20), (200, -20), dxfattribs={"layer": "0"})
    msp.add_mtext("PLATE 10MM S235", dxfattribs={"layer": "NOTES", "insert": (10, 120)})
    return dxf_text(doc)
