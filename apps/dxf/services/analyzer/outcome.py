"""
Analysis states, errors and the outcome object returned by DXFAnalyzer.

Failures are returned inside an AnalysisOutcome rather than raised;
``unwrap()`` turns them back into exceptions for callers that prefer that.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .analyzer_models import AnalysisResult


class AnalysisState(Enum):
    """Analyse-Status."""

    IDLE = "idle"
    PARSING = "parsing"
    NORMALIZING = "normalizing"
    ANALYZING_STRUCTURE = "analyzing_structure"
    DONE = "done"
    FAILED = "failed"


class AnalysisError(Exception):
    """Base class of the analysis error taxonomy."""

    kind: str = "analysis_error"

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        data = {"kind": self.kind, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


class ParseFailure(AnalysisError):
    """The parser could not read the document at all."""

    kind = "parse_failure"


class EmptyInput(AnalysisError):
    """Raw text was empty or whitespace only."""

    kind = "empty_input"


@dataclass(frozen=True)
class AnalysisOutcome:
    """Terminal state of one analysis run."""

    state: AnalysisState
    result: Optional[AnalysisResult] = None
    error: Optional[AnalysisError] = None
    transitions: tuple[AnalysisState, ...] = ()

    @property
    def success(self) -> bool:
        return self.state is AnalysisState.DONE

    def unwrap(self) -> AnalysisResult:
        """Return the result or raise the error."""
        if self.error is not None:
            raise self.error
        return self.result

    def to_dict(self) -> dict:
        data = {"success": self.success, "state": self.state.value}
        if self.result is not None:
            data["data"] = self.result.to_dict()
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data
