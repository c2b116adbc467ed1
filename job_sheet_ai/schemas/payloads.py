"""Request and response shapes of the extraction, preview, batch and generation entry points."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .raw_extraction import RawExtraction
from .structured_job import StructuredJob

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtractionRequest(BaseModel):
    model_config = _WIRE_CONFIG

    url: Optional[str] = None


class PreviewRequest(BaseModel):
    model_config = _WIRE_CONFIG

    url: Optional[str] = None
    api_key: Optional[str] = Field(default=None, description="Structuring service credential")


class PreviewResponse(BaseModel):
    """Raw extraction always; structured data only after a valid credential probe."""

    model_config = _WIRE_CONFIG

    raw_data: RawExtraction
    structured_data: Optional[StructuredJob] = None
    credential_valid: Optional[bool] = None
    error: Optional[str] = None


class BatchRequest(BaseModel):
    model_config = _WIRE_CONFIG

    urls: Optional[List[str]] = None
    api_key: Optional[str] = None


class SpreadsheetExport(BaseModel):
    """A finished workbook ready to be served as a download."""

    content: bytes
    filename: str
    media_type: str
    record_count: int = 0


class GenerationRequest(BaseModel):
    model_config = _WIRE_CONFIG

    extracted_data: Optional[RawExtraction] = None
    api_key: Optional[str] = None


class GenerationResponse(BaseModel):
    """Generated job introduction, echoed with the extraction it was written from."""

    model_config = _WIRE_CONFIG

    generated_content: str
    original_data: RawExtraction
