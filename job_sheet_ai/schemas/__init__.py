"""Schema exports."""

from .credential import CredentialStatus, ProbeResult
from .raw_extraction import RawExtraction
from .report import JobStatistics, ReportTable
from .payloads import (
    BatchRequest,
    ExtractionRequest,
    GenerationRequest,
    GenerationResponse,
    PreviewRequest,
    PreviewResponse,
    SpreadsheetExport,
)
from .structured_job import DEGRADED_MARKER, Requirements, Salary, StructuredJob

__all__ = [
    "BatchRequest",
    "CredentialStatus",
    "DEGRADED_MARKER",
    "ExtractionRequest",
    "GenerationRequest",
    "GenerationResponse",
    "JobStatistics",
    "PreviewRequest",
    "PreviewResponse",
    "ProbeResult",
    "RawExtraction",
    "ReportTable",
    "Requirements",
    "Salary",
    "SpreadsheetExport",
    "StructuredJob",
]
