"""
DXF Analyse - Strukturanalyse von Zeichnungen

Runs parse -> normalize -> analyze layers -> compute bounds -> aggregate
statistics over raw DXF text and returns one immutable AnalysisOutcome.
The analyzer performs no I/O and keeps no state between calls.
"""
import logging
from typing import Optional

from .analyzer_models import AnalysisResult
from .bounds_calculator import compute_bounds
from .dxf_parser import DXFParseError, DXFParserService
from .entity_normalizer import normalize
from .layer_analyzer import analyze_layers
from .outcome import AnalysisError, AnalysisOutcome, AnalysisState, EmptyInput, ParseFailure
from .statistics import aggregate

logger = logging.getLogger(__name__)


class DXFAnalyzer:
    """
    Structural analysis engine for DXF drawings.

    Usage:
        analyzer = DXFAnalyzer()
        outcome = analyzer.analyze(dxf_text, len(dxf_bytes))

        if outcome.success:
            result = outcome.result
            print(result.statistics.total_entities, result.bounds)
        else:
            print(outcome.error.kind, outcome.error.message)

    Any object with a ``parse(raw_text) -> ParsedDocument`` method may be
    passed as parser; it must raise DXFParseError for unreadable documents.
    """

    def __init__(self, parser=None):
        self.parser = parser or DXFParserService()

    def analyze(self, raw_text: str, raw_byte_length: Optional[int] = None) -> AnalysisOutcome:
        """
        Analyze raw DXF text.

        Args:
            raw_text: Complete DXF document text
            raw_byte_length: Size of the source file in bytes. Defaults to the
                             UTF-8 length of ``raw_text``.

        Returns:
            AnalysisOutcome in state DONE (with result) or FAILED (with error)
        """
        if raw_byte_length is None:
            raw_byte_length = len((raw_text or "").encode("utf-8"))
        if raw_byte_length < 0:
            raise ValueError(f"raw_byte_length must not be negative: {raw_byte_length}")

        transitions = [AnalysisState.IDLE]

        if not raw_text or not raw_text.strip():
            return self._fail(transitions, EmptyInput("DXF content is empty"))

        self._enter(transitions, AnalysisState.PARSING)
        try:
            document = self.parser.parse(raw_text)
        except DXFParseError as e:
            return self._fail(transitions, ParseFailure(str(e)))

        self._enter(transitions, AnalysisState.NORMALIZING)
        entities = normalize(document.entities)

        self._enter(transitions, AnalysisState.ANALYZING_STRUCTURE)
        layers = analyze_layers(document.layers, entities)
        bounds = compute_bounds(entities)
        statistics = aggregate(entities, layers, raw_byte_length)

        self._enter(transitions, AnalysisState.DONE)
        logger.info(
            "Analyzed DXF: %d entities, %d layers, %s",
            statistics.total_entities,
            statistics.layer_count,
            statistics.file_size_label,
        )
        return AnalysisOutcome(
            state=AnalysisState.DONE,
            result=AnalysisResult(
                layers=layers,
                entities=entities,
                bounds=bounds,
                statistics=statistics,
            ),
            transitions=tuple(transitions),
        )

    def analyze_bytes(self, content: bytes) -> AnalysisOutcome:
        """Analyze DXF content from bytes (undecodable bytes are dropped)."""
        return self.analyze(content.decode("utf-8", errors="ignore"), len(content))

    def _enter(self, transitions: list, state: AnalysisState):
        logger.debug("Analysis %s -> %s", transitions[-1].value, state.value)
        transitions.append(state)

    def _fail(self, transitions: list, error: AnalysisError) -> AnalysisOutcome:
        logger.warning(
            "DXF analysis failed while %s: [%s] %s",
            transitions[-1].value,
            error.kind,
            error.message,
        )
        self._enter(transitions, AnalysisState.FAILED)
        return AnalysisOutcome(
            state=AnalysisState.FAILED,
            error=error,
            transitions=tuple(transitions),
        )


# Convenience function
def analyze_dxf(raw_text: str, raw_byte_length: Optional[int] = None) -> AnalysisOutcome:
    """Quick analyze function."""
    return DXFAnalyzer().analyze(raw_text, raw_byte_length)
