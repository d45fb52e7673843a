"""
test_dxf_analyzer.py
Coordinator: state transitions, failure taxonomy and end-to-end scenarios
with a stand-in parser.
"""
import json

import pytest

from apps.dxf.services.analyzer import (
    AnalysisState,
    Bounds,
    DXFAnalyzer,
    DXFParseError,
    EmptyInput,
    ParsedDocument,
    ParseFailure,
    Point2,
    RawEntity,
    RawLayer,
)


def test_minimal_valid_document(fake_parser, minimal_document):
    outcome = DXFAnalyzer(fake_parser(minimal_document)).analyze("0\nEOF\n", 2048)

    assert outcome.success
    assert outcome.state is AnalysisState.DONE
    assert outcome.error is None

    result = outcome.result
    assert result.bounds == Bounds(min=Point2(0.0, 0.0), max=Point2(10.0, 5.0))

    l1 = result.get_layer("L1")
    assert (l1.visible, l1.frozen, l1.entity_count) == (True, False, 1)
    assert result.get_layer("0").entity_count == 0

    stats = result.statistics
    assert stats.total_entities == 1
    assert stats.entity_type_counts == {"LINE": 1}
    assert stats.layer_count == 2
    assert stats.file_size_label == "2.0 KB"


def test_state_transitions(fake_parser, minimal_document):
    outcome = DXFAnalyzer(fake_parser(minimal_document)).analyze("0\nEOF\n", 6)

    assert outcome.transitions == (
        AnalysisState.IDLE,
        AnalysisState.PARSING,
        AnalysisState.NORMALIZING,
        AnalysisState.ANALYZING_STRUCTURE,
        AnalysisState.DONE,
    )


@pytest.mark.parametrize("raw_text", ["", "   \n\t  ", None])
def test_empty_input_skips_parser(fake_parser, raw_text):
    parser = fake_parser()
    outcome = DXFAnalyzer(parser).analyze(raw_text, 0)

    assert not outcome.success
    assert outcome.state is AnalysisState.FAILED
    assert isinstance(outcome.error, EmptyInput)
    assert outcome.result is None
    assert outcome.transitions == (AnalysisState.IDLE, AnalysisState.FAILED)
    assert parser.calls == 0


def test_unreadable_document(fake_parser):
    parser = fake_parser(error=DXFParseError('Invalid group code "garbage" at line 1.'))
    outcome = DXFAnalyzer(parser).analyze("garbage\n", 8)

    assert outcome.state is AnalysisState.FAILED
    assert isinstance(outcome.error, ParseFailure)
    assert outcome.error.message == 'Invalid group code "garbage" at line 1.'
    assert outcome.result is None
    assert outcome.transitions[-2:] == (AnalysisState.PARSING, AnalysisState.FAILED)

    with pytest.raises(ParseFailure):
        outcome.unwrap()


def test_retry_after_failure_is_deterministic(fake_parser):
    analyzer = DXFAnalyzer(fake_parser(error=DXFParseError("broken")))

    first = analyzer.analyze("x\ny\n", 4)
    second = analyzer.analyze("x\ny\n", 4)

    assert first.to_dict() == second.to_dict()


def test_determinism(fake_parser):
    document = ParsedDocument(
        entities=(
            RawEntity("LINE", {"layer": "A", "start": (0, 0), "end": (3, 4)}),
            RawEntity("CIRCLE", {"layer": "B", "center": (10, 10), "radius": 1}),
            RawEntity("SPLINE", {"layer": "A"}),
        ),
        layers=(RawLayer("A", flags=1), RawLayer("B", flags=4)),
    )
    analyzer = DXFAnalyzer(fake_parser(document))

    first = analyzer.analyze("content", 100)
    second = analyzer.analyze("content", 100)

    assert first.result == second.result
    assert first.result is not second.result


def test_graceful_degradation(fake_parser):
    raw = [RawEntity("LINE", {"start": (i, 0), "end": (i, 1)}) for i in range(7)]
    raw += [RawEntity("FOO", {}), RawEntity("BAR", {}), RawEntity("FOO", {"layer": "X"})]
    outcome = DXFAnalyzer(fake_parser(ParsedDocument(entities=tuple(raw)))).analyze("content", 10)

    assert outcome.success
    stats = outcome.result.statistics
    assert len(outcome.result.entities) == 10
    assert stats.entity_type_counts == {"LINE": 7, "FOO": 2, "BAR": 1}
    assert sum(stats.entity_type_counts.values()) == stats.total_entities


def test_layer_table_without_default_layer(fake_parser):
    document = ParsedDocument(layers=(RawLayer("A"), RawLayer("B")))
    layers = DXFAnalyzer(fake_parser(document)).analyze("content", 7).result.layers

    assert [layer.name for layer in layers].count("0") == 1


def test_byte_length_defaults_to_utf8_size(fake_parser):
    outcome = DXFAnalyzer(fake_parser()).analyze("ä" * 1024)
    assert outcome.result.statistics.file_size_label == "2.0 KB"


def test_negative_byte_length_is_rejected(fake_parser):
    with pytest.raises(ValueError):
        DXFAnalyzer(fake_parser()).analyze("content", -1)


def test_outcome_is_json_serializable(fake_parser, minimal_document):
    outcome = DXFAnalyzer(fake_parser(minimal_document)).analyze("content", 0)
    data = json.loads(json.dumps(outcome.to_dict()))

    assert data["success"] is True
    assert data["state"] == "done"
    assert data["data"]["entities"][0] == {
        "type": "LINE",
        "layer": "L1",
        "start": {"x": 0.0, "y": 0.0},
        "end": {"x": 10.0, "y": 5.0},
    }
    assert data["data"]["statistics"]["file_size"] == "0 B"
