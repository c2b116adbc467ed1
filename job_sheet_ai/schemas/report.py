"""Report tables derived from a batch result."""

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

Cell = Union[str, int, float]


class ReportTable(BaseModel):
    """One sheet of the report: a name, column headers and rows of plain cells."""

    model_config = ConfigDict(frozen=True)

    name: str
    headers: List[str]
    rows: List[List[Cell]] = Field(default_factory=list)


class JobStatistics(BaseModel):
    """Exact frequency counts over a batch. Keys keep first-seen order."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    by_job_title: Dict[str, int] = Field(default_factory=dict)
    by_location: Dict[str, int] = Field(default_factory=dict)
    by_employment_type: Dict[str, int] = Field(default_factory=dict)
