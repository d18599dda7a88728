from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, translate_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, employee_id, work_date, entry_time, exit_time, status, shift, observations, created_at"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_entity(r: dict) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=int(r["record_id"]),
            employee_id=int(r["employee_id"]),
            work_date=r["work_date"],
            entry_time=normalize_mysql_time(r.get("entry_time")),
            exit_time=normalize_mysql_time(r.get("exit_time")),
            status=AttendanceStatus(r["status"]),
            shift=ShiftType(r.get("shift") or ShiftType.FULL_DAY.value),
            observations=r.get("observations"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return self._to_entity(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return self._to_entity(r) if r else None

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        entry_time: Optional[time],
        exit_time: Optional[time],
        status: AttendanceStatus,
        shift: ShiftType = ShiftType.FULL_DAY,
        observations: Optional[str] = None,
    ) -> int:
        with translate_duplicate_key("Já existe um registro para este funcionário nesta data"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, entry_time, exit_time, status, shift, observations)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, entry_time, exit_time, status.value, shift.value, observations),
                )
                return int(cur.lastrowid)

    def update_exit(self, *, record_id: int, exit_time: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET exit_time=%s
                WHERE record_id=%s AND status=%s AND entry_time IS NOT NULL AND exit_time IS NULL
                """,
                (exit_time, int(record_id), AttendanceStatus.PRESENT.value),
            )
            return cur.rowcount > 0

    def replace_record(
        self,
        *,
        record_id: int,
        entry_time: Optional[time],
        exit_time: Optional[time],
        status: AttendanceStatus,
        shift: ShiftType,
        observations: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET entry_time=%s, exit_time=%s, status=%s, shift=%s, observations=%s
                WHERE record_id=%s
                """,
                (entry_time, exit_time, status.value, shift.value, observations, int(record_id)),
            )
            return cur.rowcount > 0

    def update_observations(self, *, record_id: int, observations: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET observations=%s WHERE record_id=%s",
                (observations, int(record_id)),
            )
            # rowcount is 0 when the value is unchanged, so confirm existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT record_id FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return fetchone(cur) is not None

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date ASC, employee_id ASC
                """,
                tuple(params),
            )
            return [self._to_entity(r) for r in fetchall(cur)]
