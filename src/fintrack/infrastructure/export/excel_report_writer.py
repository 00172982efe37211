"""Excel writer for locally aggregated income/expense reports."""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from fintrack.application.dtos import CategoryBreakdownItem, IncomeExpenseReport


class ExcelStyles:
    """Style definitions for report workbooks."""

    PRIMARY_BLUE = "1E3A5F"
    SUCCESS_GREEN = "059669"
    WARNING_AMBER = "D97706"
    HEADER_BG = "1E3A5F"
    HEADER_FG = "FFFFFF"
    ALT_ROW_BG = "F9FAFB"

    TITLE_FONT = Font(name="Calibri", size=20, bold=True, color=PRIMARY_BLUE)
    SUBTITLE_FONT = Font(name="Calibri", size=12, color="6B7280")
    HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=HEADER_FG)
    METRIC_LABEL_FONT = Font(name="Calibri", size=10, color="6B7280")
    METRIC_VALUE_FONT = Font(name="Calibri", size=14, bold=True, color=PRIMARY_BLUE)
    BODY_FONT = Font(name="Calibri", size=10)
    POSITIVE_FONT = Font(name="Calibri", size=10, color=SUCCESS_GREEN)
    NEGATIVE_FONT = Font(name="Calibri", size=10, color=WARNING_AMBER)

    HEADER_FILL = PatternFill(start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid")
    ALT_ROW_FILL = PatternFill(start_color=ALT_ROW_BG, end_color=ALT_ROW_BG, fill_type="solid")

    CENTER = Alignment(horizontal="center", vertical="center")
    RIGHT = Alignment(horizontal="right", vertical="center")


class ExcelReportWriter:
    """Render an IncomeExpenseReport as an xlsx workbook.

    Sheets:
    1. Summary - totals and net income for the range
    2. Expenses - expense breakdown by category
    3. Income - income breakdown by category
    4. Trend - one row per bucket
    """

    def __init__(self, currency: str = "USD"):
        self._styles = ExcelStyles()
        self._money_format = f'#,##0.00 "{currency}"'

    def render(
        self,
        report: IncomeExpenseReport,
        generated_at: Optional[datetime] = None,
    ) -> bytes:
        wb = Workbook()

        default_sheet = wb.active
        if default_sheet is not None:
            wb.remove(default_sheet)

        self._create_summary_sheet(wb, report, generated_at or datetime.now())
        self._create_breakdown_sheet(wb, "Expenses", report.expense_by_category)
        self._create_breakdown_sheet(wb, "Income", report.income_by_category)
        self._create_trend_sheet(wb, report)

        output = BytesIO()
        wb.save(output)
        return output.getvalue()

    def _create_summary_sheet(
        self,
        wb: Workbook,
        report: IncomeExpenseReport,
        generated_at: datetime,
    ) -> None:
        ws = wb.create_sheet(title="Summary")

        ws.cell(row=1, column=1, value="Income & Expense Report").font = self._styles.TITLE_FONT
        period = f"Period: {report.start.isoformat()} to {report.end.isoformat()}"
        ws.cell(row=2, column=1, value=period).font = self._styles.SUBTITLE_FONT
        generated = generated_at.strftime("%d %B %Y, %H:%M")
        ws.cell(row=3, column=1, value=f"Generated: {generated}").font = self._styles.SUBTITLE_FONT

        metrics = [
            ("Total Income", report.total_income),
            ("Total Expenses", report.total_expense),
            ("Net Income", report.net_income),
        ]
        for col, (label, value) in enumerate(metrics, start=1):
            label_cell = ws.cell(row=5, column=col, value=label)
            label_cell.font = self._styles.METRIC_LABEL_FONT
            label_cell.alignment = self._styles.CENTER

            value_cell = ws.cell(row=6, column=col, value=float(value))
            value_cell.number_format = self._money_format
            value_cell.font = self._styles.METRIC_VALUE_FONT
            value_cell.alignment = self._styles.CENTER

        ws.cell(row=8, column=1, value="Transactions").font = self._styles.METRIC_LABEL_FONT
        ws.cell(row=8, column=2, value=report.transaction_count).font = self._styles.BODY_FONT

        for col in range(1, 4):
            ws.column_dimensions[get_column_letter(col)].width = 22

    def _create_breakdown_sheet(
        self,
        wb: Workbook,
        title: str,
        items: list[CategoryBreakdownItem],
    ) -> None:
        ws = wb.create_sheet(title=title)
        self._write_header(ws, ["Category", "Amount", "% of Total", "Transactions"])

        for row_idx, item in enumerate(items, start=2):
            ws.cell(row=row_idx, column=1, value=item.category_name)
            ws.cell(
                row=row_idx,
                column=2,
                value=float(item.amount),
            ).number_format = self._money_format
            ws.cell(
                row=row_idx,
                column=3,
                value=float(item.percentage) / 100,
            ).number_format = "0.0%"
            ws.cell(row=row_idx, column=4, value=item.transaction_count)
            self._style_body_row(ws, row_idx, 4)

        ws.freeze_panes = "A2"
        for col, width in enumerate([30, 16, 12, 14], start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _create_trend_sheet(self, wb: Workbook, report: IncomeExpenseReport) -> None:
        ws = wb.create_sheet(title="Trend")
        self._write_header(ws, ["Period", "Income", "Expenses", "Net"])

        for row_idx, point in enumerate(report.trend, start=2):
            ws.cell(row=row_idx, column=1, value=point.period_label)
            for col, value in enumerate((point.income, point.expense, point.net), start=2):
                ws.cell(row=row_idx, column=col, value=float(value)).number_format = (
                    self._money_format
                )
            self._style_body_row(ws, row_idx, 4)
            ws.cell(row=row_idx, column=4).font = (
                self._styles.POSITIVE_FONT if point.net >= 0 else self._styles.NEGATIVE_FONT
            )

        ws.freeze_panes = "A2"
        for col, width in enumerate([24, 16, 16, 16], start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _write_header(self, ws: Worksheet, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = self._styles.HEADER_FONT
            cell.fill = self._styles.HEADER_FILL
            cell.alignment = self._styles.CENTER

    def _style_body_row(self, ws: Worksheet, row_idx: int, columns: int) -> None:
        for col in range(1, columns + 1):
            cell = ws.cell(row=row_idx, column=col)
            cell.font = self._styles.BODY_FONT
            if col > 1:
                cell.alignment = self._styles.RIGHT
            if row_idx % 2 == 0:
                cell.fill = self._styles.ALT_ROW_FILL
