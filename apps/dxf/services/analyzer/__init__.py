"""DXF analyzer: parser, normalizer, layer/bounds/statistics steps, dxf_analyzer."""
from .dxf_parser import DXFParseError, DXFParserService, ParsedDocument, RawEntity, RawLayer
from .dxf_analyzer import DXFAnalyzer, analyze_dxf
from .entity_normalizer import normalize
from .layer_analyzer import analyze_layers
from .bounds_calculator import compute_bounds
from .statistics import aggregate, format_file_size
from .outcome import (
    AnalysisError,
    AnalysisOutcome,
    AnalysisState,
    EmptyInput,
    ParseFailure,
)
from .analyzer_models import (
    AnalysisResult,
    Arc,
    Bounds,
    Circle,
    Entity,
    EntityKind,
    Layer,
    Line,
    Other,
    Point2,
    Polyline,
    Statistics,
    Text,
)
