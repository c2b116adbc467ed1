"""Service exports."""

from .content_extractor import extract_content, normalize_text, select_main_text
from .credential_prober import classify_status, probe_credential
from .page_fetcher import create_http_client, fetch_page
from .report_builder import build_report, compute_statistics
from .spreadsheet_writer import report_filename, write_workbook

__all__ = [
    "build_report",
    "classify_status",
    "compute_statistics",
    "create_http_client",
    "extract_content",
    "fetch_page",
    "normalize_text",
    "probe_credential",
    "report_filename",
    "select_main_text",
    "write_workbook",
]
