"""DXF services: analyzer/ (parser adapter and structural analysis engine)."""
from .analyzer import (
    AnalysisOutcome,
    AnalysisResult,
    DXFAnalyzer,
    DXFParserService,
    analyze_dxf,
)
__all__ = [
    "AnalysisOutcome",
    "AnalysisResult",
    "DXFAnalyzer",
    "DXFParserService",
    "analyze_dxf",
]
