"""Agent exports."""

from .batch_agent import ItemState, run_batch
from .pipeline import export_batch, extract_url, preview_url
from .structuring_agent import StructuringClient, build_structuring_prompt, parse_structuring_reply

__all__ = [
    "ItemState",
    "StructuringClient",
    "build_structuring_prompt",
    "export_batch",
    "extract_url",
    "parse_structuring_reply",
    "preview_url",
    "run_batch",
]
