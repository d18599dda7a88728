from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate_key
from ..schedules.model import WeekDay
from .model import Employee
from .repository import EmployeeRepository

_DUPLICATE_REGISTRATION = "Matrícula já cadastrada"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_work_days(self, cur, employee_ids: list[int]) -> dict[int, set[WeekDay]]:
        out: dict[int, set[WeekDay]] = {eid: set() for eid in employee_ids}
        if not employee_ids:
            return out

        placeholders = ",".join(["%s"] * len(employee_ids))
        cur.execute(
            f"SELECT employee_id, weekday FROM employee_work_days WHERE employee_id IN ({placeholders})",
            tuple(employee_ids),
        )
        for r in fetchall(cur):
            out[int(r["employee_id"])].add(WeekDay(r["weekday"]))
        return out

    def _to_entity(self, r: dict, work_days: set[WeekDay]) -> Employee:
        return Employee(
            employee_id=int(r["employee_id"]),
            name=r["name"],
            position=r["position"],
            registration=r["registration"],
            work_days=frozenset(work_days),
            is_active=bool(r.get("is_active", True)),
            created_at=r.get("created_at"),
        )

    def _select(self, where: str = "", params: tuple = ()) -> list[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, name, position, registration, is_active, created_at
                FROM employees
                {where}
                ORDER BY name ASC
                """,
                params,
            )
            rows = fetchall(cur)
            days = self._load_work_days(cur, [int(r["employee_id"]) for r in rows])
            return [self._to_entity(r, days[int(r["employee_id"])]) for r in rows]

    def list_all(self) -> Sequence[Employee]:
        return self._select()

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        rows = self._select("WHERE employee_id=%s", (int(employee_id),))
        return rows[0] if rows else None

    def get_by_registration(self, registration: str) -> Optional[Employee]:
        rows = self._select("WHERE registration=%s", (registration,))
        return rows[0] if rows else None

    def _replace_work_days(self, cur, employee_id: int, work_days: AbstractSet[WeekDay]) -> None:
        cur.execute("DELETE FROM employee_work_days WHERE employee_id=%s", (employee_id,))
        cur.executemany(
            "INSERT INTO employee_work_days(employee_id, weekday) VALUES(%s,%s)",
            [(employee_id, d.value) for d in work_days],
        )

    def create(
        self,
        *,
        name: str,
        position: str,
        registration: str,
        work_days: AbstractSet[WeekDay],
    ) -> int:
        with translate_duplicate_key(_DUPLICATE_REGISTRATION):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO employees(name, position, registration, is_active) VALUES(%s,%s,%s,1)",
                    (name, position, registration),
                )
                employee_id = int(cur.lastrowid)
                self._replace_work_days(cur, employee_id, work_days)
                return employee_id

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        position: str,
        registration: str,
        work_days: AbstractSet[WeekDay],
        is_active: bool,
    ) -> bool:
        with translate_duplicate_key(_DUPLICATE_REGISTRATION):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
                if not fetchone(cur):
                    return False
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, position=%s, registration=%s, is_active=%s
                    WHERE employee_id=%s
                    """,
                    (name, position, registration, 1 if is_active else 0, int(employee_id)),
                )
                self._replace_work_days(cur, int(employee_id), work_days)
                return True

    def delete(self, employee_id: int) -> bool:
        # Same transaction as the history, so a late punch cannot block the delete.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
