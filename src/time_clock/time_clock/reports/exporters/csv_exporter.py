from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ...attendance.model import AttendanceRow
from ...common.datetime_utils import format_hhmm, now_local
from ..duration import format_duration, worked_minutes
from .base import ExportFile, RecordsExporter

CSV_HEADERS = ["Data", "Funcionário", "Matrícula", "Cargo", "Entrada", "Saída", "Horas Trabalhadas"]


class CsvRecordsExporter(RecordsExporter):
    """Flat CSV with the worked duration of every record."""

    def export_rows(self, rows: Sequence[AttendanceRow], *, start: date, end: date) -> ExportFile:
        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)

        # Newest first.
        for row in sorted(rows, key=lambda row: row.record.work_date, reverse=True):
            r, e = row.record, row.employee
            writer.writerow([
                r.work_date.strftime("%d/%m/%Y"),
                e.name if e else "N/A",
                e.registration if e else "N/A",
                e.position if e else "N/A",
                format_hhmm(r.entry_time) or "N/A",
                format_hhmm(r.exit_time) or "N/A",
                format_duration(worked_minutes(r.entry_time, r.exit_time)),
            ])

        return ExportFile(
            content=out.getvalue().encode("utf-8-sig"),
            filename=f"registros_ponto_{now_local().strftime('%Y-%m-%d')}.csv",
            mimetype="text/csv",
        )
