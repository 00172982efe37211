"""File exports: downloaded CSV/PDF and locally rendered workbooks."""

from fintrack.infrastructure.export.excel_report_writer import ExcelReportWriter
from fintrack.infrastructure.export.files import export_filename, save_export

__all__ = [
    "ExcelReportWriter",
    "export_filename",
    "save_export",
]
