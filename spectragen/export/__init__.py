"""Export — spectrum data export (CSV)."""

from spectragen.export.csv_export import CsvExporter

__all__ = [
    "CsvExporter",
]
