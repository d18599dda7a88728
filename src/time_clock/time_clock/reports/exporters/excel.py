from __future__ import annotations

import io
from datetime import date
from typing import Sequence

import pandas as pd

from ...attendance.model import AttendanceRow
from ...core.enums import AttendanceStatus
from ...schedules.model import sorted_work_days
from ..duration import status_label
from ..service import AttendanceReport
from .base import XLSX_MIMETYPE, ExportFile, RecordsExporter

DETAIL_COLUMNS = ["Data", "Matrícula", "Entrada", "Saída", "Status", "Observações"]
ABSENCE_COLUMNS = ["Data", "Matrícula", "Nome", "Cargo", "Status", "Observações"]
SUMMARY_COLUMNS = [
    "Matrícula", "Nome", "Cargo", "Dias Escalados", "Total de Dias",
    "Presentes", "Faltas", "% Presença", "% Faltas",
]
SIMPLE_COLUMNS = ["Data", "Matrícula", "Nome", "Cargo", "Entrada", "Saída", "Status", "Observações"]


def _percent(part: int, total: int) -> str:
    return f"{part / total * 100:.1f}%" if total > 0 else "0%"


def _hhmm(value) -> str:
    return value.strftime("%H:%M") if value is not None else "-"


def _write_workbook(sheets: list[tuple[str, pd.DataFrame]]) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        for name, df in sheets:
            df.to_excel(writer, index=False, sheet_name=name)
    return out.getvalue()


class AttendanceWorkbookExporter:
    """Full report: summary, per-employee detail, absences only, statistics."""

    def export_report(self, report: AttendanceReport) -> ExportFile:
        summary = []
        detail = []
        absences = []

        for item in report.items:
            e = item.employee
            summary.append({
                "Matrícula": e.registration,
                "Nome": e.name,
                "Cargo": e.position,
                "Dias Escalados": ", ".join(d.label for d in sorted_work_days(e.work_days)),
                "Total de Dias": item.total_days,
                "Presentes": item.present,
                "Faltas": item.absent,
                "% Presença": _percent(item.present, item.total_days),
                "% Faltas": _percent(item.absent, item.total_days),
            })

            detail.append({
                "Data": f"FUNCIONÁRIO: {e.name}",
                "Matrícula": e.registration,
                "Entrada": "", "Saída": "", "Status": "", "Observações": "",
            })
            for r in item.records:
                detail.append({
                    "Data": r.work_date.isoformat(),
                    "Matrícula": e.registration,
                    "Entrada": _hhmm(r.entry_time),
                    "Saída": _hhmm(r.exit_time),
                    "Status": status_label(r.status),
                    "Observações": r.observations or "",
                })
                if r.status == AttendanceStatus.ABSENT:
                    absences.append({
                        "Data": r.work_date.isoformat(),
                        "Matrícula": e.registration,
                        "Nome": e.name,
                        "Cargo": e.position,
                        "Status": status_label(r.status),
                        "Observações": r.observations or "",
                    })
            detail.append({col: "" for col in DETAIL_COLUMNS})

        total_days = sum(i.total_days for i in report.items)
        total_present = sum(i.present for i in report.items)
        total_absent = sum(i.absent for i in report.items)
        start_s = report.start_date.isoformat()
        end_s = report.end_date.isoformat()

        stats = [
            {"Estatística": "Total de Funcionários", "Valor": len(report.items)},
            {"Estatística": "Total de Dias Escalados", "Valor": total_days},
            {"Estatística": "Total de Presenças", "Valor": total_present},
            {"Estatística": "Total de Faltas", "Valor": total_absent},
            {"Estatística": "% Geral de Presença", "Valor": _percent(total_present, total_days)},
            {"Estatística": "% Geral de Faltas", "Valor": _percent(total_absent, total_days)},
            {"Estatística": "", "Valor": ""},
            {"Estatística": "Período do Relatório", "Valor": f"{start_s} a {end_s}"},
            {"Estatística": "Data de Geração", "Valor": report.generated_at.strftime("%d/%m/%Y %H:%M")},
        ]

        content = _write_workbook([
            ("Resumo Geral", pd.DataFrame(summary, columns=SUMMARY_COLUMNS)),
            ("Detalhamento", pd.DataFrame(detail, columns=DETAIL_COLUMNS)),
            ("Faltas", pd.DataFrame(absences, columns=ABSENCE_COLUMNS)),
            # Mixed int/str values; object dtype keeps them as written.
            ("Estatísticas", pd.DataFrame(stats, columns=["Estatística", "Valor"], dtype=object)),
        ])
        return ExportFile(
            content=content,
            filename=f"relatorio_frequencia_{start_s}_{end_s}.xlsx",
            mimetype=XLSX_MIMETYPE,
        )


class SimpleWorkbookExporter(RecordsExporter):
    """One flat sheet, one row per record."""

    def export_rows(self, rows: Sequence[AttendanceRow], *, start: date, end: date) -> ExportFile:
        data = []
        for row in rows:
            r, e = row.record, row.employee
            data.append({
                "Data": r.work_date.isoformat(),
                "Matrícula": e.registration if e else "",
                "Nome": e.name if e else "",
                "Cargo": e.position if e else "",
                "Entrada": _hhmm(r.entry_time),
                "Saída": _hhmm(r.exit_time),
                "Status": status_label(r.status),
                "Observações": r.observations or "",
            })

        content = _write_workbook([("Registros de Ponto", pd.DataFrame(data, columns=SIMPLE_COLUMNS))])
        return ExportFile(
            content=content,
            filename=f"registros_ponto_{start.isoformat()}_{end.isoformat()}.xlsx",
            mimetype=XLSX_MIMETYPE,
        )
