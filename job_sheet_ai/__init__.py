"""Job Sheet AI: job posting pages to structured records and an Excel report."""

__version__ = "0.1.0"
