"""Build the listing, detail and statistics tables from a batch result."""

from collections import Counter
from typing import Iterable, List, Optional, Sequence

from job_sheet_ai.config import REPORT_TIMEZONE
from job_sheet_ai.schemas.report import Cell, JobStatistics, ReportTable
from job_sheet_ai.schemas.structured_job import StructuredJob
from job_sheet_ai.utils.helpers import format_local_time

LISTING_SHEET = "Job Listings"
DETAIL_SHEET = "Details"
STATISTICS_SHEET = "Statistics"

LISTING_HEADERS = [
    "Job Title",
    "Company",
    "Location",
    "Salary Min",
    "Salary Max",
    "Salary Type",
    "Employment Type",
    "URL",
    "Extracted At",
]

DETAIL_HEADERS = [
    "No.",
    "Job Title",
    "Company",
    "Location",
    "Salary Min",
    "Salary Max",
    "Salary Type",
    "Salary Details",
    "Working Hours",
    "Holidays",
    "Benefits",
    "Experience",
    "Skills",
    "Education",
    "Job Description",
    "Application Method",
    "Employment Type",
    "URL",
    "Extracted At (UTC)",
]

STATISTICS_HEADERS = ["Item", "Value"]
LIST_DELIMITER = ", "


def _cell(value: Optional[Cell]) -> Cell:
    # Absent renders as an empty cell; 0 is a real value
    return "" if value is None else value


def _joined(values: Iterable[str]) -> str:
    return LIST_DELIMITER.join(values)


def build_listing_table(jobs: Sequence[StructuredJob], tz: str = REPORT_TIMEZONE) -> ReportTable:
    rows = [
        [
            _cell(job.job_title),
            _cell(job.company_name),
            _cell(job.location),
            _cell(job.salary.min),
            _cell(job.salary.max),
            _cell(job.salary.type),
            _cell(job.employment_type),
            job.source_url,
            format_local_time(job.extracted_at_utc, tz),
        ]
        for job in jobs
    ]
    return ReportTable(name=LISTING_SHEET, headers=LISTING_HEADERS, rows=rows)


def build_detail_table(jobs: Sequence[StructuredJob]) -> ReportTable:
    rows = []
    for number, job in enumerate(jobs, start=1):
        rows.append(
            [
                number,
                _cell(job.job_title),
                _cell(job.company_name),
                _cell(job.location),
                _cell(job.salary.min),
                _cell(job.salary.max),
                _cell(job.salary.type),
                _cell(job.salary.details),
                _cell(job.working_hours),
                _cell(job.holidays),
                _joined(job.benefits),
                _cell(job.requirements.experience),
                _joined(job.requirements.skills),
                _cell(job.requirements.education),
                _cell(job.job_description),
                _cell(job.application_method),
                _cell(job.employment_type),
                job.source_url,
                job.extracted_at_utc.isoformat(),
            ]
        )
    return ReportTable(name=DETAIL_SHEET, headers=DETAIL_HEADERS, rows=rows)


def _count(values: Iterable[Optional[str]]) -> dict:
    # Exact keys, no case folding; absent values are not counted
    return dict(Counter(v for v in values if v))


def compute_statistics(jobs: Sequence[StructuredJob]) -> JobStatistics:
    return JobStatistics(
        total=len(jobs),
        by_job_title=_count(j.job_title for j in jobs),
        by_location=_count(j.location for j in jobs),
        by_employment_type=_count(j.employment_type for j in jobs),
    )


def build_statistics_table(jobs: Sequence[StructuredJob]) -> ReportTable:
    """
    Total count, then one labeled section per grouping field.
    A blank row separates sections; each section lists key/count pairs.
    """
    stats = compute_statistics(jobs)
    rows: List[List[Cell]] = [["Total jobs", stats.total]]
    sections = (
        ("By job title", stats.by_job_title),
        ("By location", stats.by_location),
        ("By employment type", stats.by_employment_type),
    )
    for label, counts in sections:
        rows.append(["", ""])
        rows.append([label, ""])
        rows.extend([key, count] for key, count in counts.items())
    return ReportTable(name=STATISTICS_SHEET, headers=STATISTICS_HEADERS, rows=rows)


def build_report(jobs: Sequence[StructuredJob], tz: str = REPORT_TIMEZONE) -> List[ReportTable]:
    """All three tables, in sheet order. Empty input gives header-only tables plus the zero total."""
    return [
        build_listing_table(jobs, tz=tz),
        build_detail_table(jobs),
        build_statistics_table(jobs),
    ]
