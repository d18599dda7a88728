from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ...attendance.model import AttendanceRow

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True)
class ExportFile:
    """Rendered artifact handed back to the caller for download."""

    content: bytes
    filename: str
    mimetype: str


class RecordsExporter(ABC):
    """Strategy for rendering a flat list of attendance records."""

    @abstractmethod
    def export_rows(self, rows: Sequence[AttendanceRow], *, start: date, end: date) -> ExportFile:
        raise NotImplementedError
