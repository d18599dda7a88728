from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.time_clock.time_clock.attendance.model import AttendanceRecord
from src.time_clock.time_clock.container import wire_services
from src.time_clock.time_clock.core.enums import AttendanceStatus, Role, ShiftType
from src.time_clock.time_clock.core.exceptions import DuplicateRecordError
from src.time_clock.time_clock.employees.model import Employee
from src.time_clock.time_clock.schedules.model import WeekDay
from src.time_clock.time_clock.users.model import User

WEEKDAYS = frozenset({WeekDay.MONDAY, WeekDay.TUESDAY, WeekDay.WEDNESDAY, WeekDay.THURSDAY, WeekDay.FRIDAY})


class InMemoryEmployees:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self._id = 0

    def add(self, *, name="Ana", position="Caixa", registration="1001", work_days=WEEKDAYS, is_active=True) -> Employee:
        employee_id = self.create(name=name, position=position, registration=registration, work_days=work_days)
        if not is_active:
            self.employees[employee_id] = dataclasses.replace(self.employees[employee_id], is_active=False)
        return self.employees[employee_id]

    def list_all(self):
        return sorted(self.employees.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def get_by_registration(self, registration: str) -> Optional[Employee]:
        return next((e for e in self.employees.values() if e.registration == registration), None)

    def create(self, *, name, position, registration, work_days) -> int:
        self._id += 1
        self.employees[self._id] = Employee(
            employee_id=self._id,
            name=name,
            position=position,
            registration=registration,
            work_days=frozenset(work_days),
            created_at=datetime(2024, 1, 1, 9, 0),
        )
        return self._id

    def update(self, *, employee_id, name, position, registration, work_days, is_active) -> bool:
        current = self.employees.get(employee_id)
        if current is None:
            return False
        self.employees[employee_id] = dataclasses.replace(
            current,
            name=name,
            position=position,
            registration=registration,
            work_days=frozenset(work_days),
            is_active=is_active,
        )
        return True

    def delete(self, employee_id: int) -> bool:
        return self.employees.pop(employee_id, None) is not None


class InMemoryAttendance:
    """Mirrors the unique (employee, date) key and the conditional exit update."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.records.values() if r.employee_id == employee_id and r.work_date == work_date),
            None,
        )

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
        if self.get_for_employee_and_date(employee_id, work_date) is not None:
            raise DuplicateRecordError("Registro já existe para esta data")
        self._id += 1
        self.records[self._id] = AttendanceRecord(
            record_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            entry_time=entry_time,
            exit_time=exit_time,
            status=status,
            shift=shift,
            observations=observations,
        )
        return self._id

    def update_exit(self, *, record_id: int, exit_time: time) -> bool:
        current = self.records.get(record_id)
        if (
            current is None
            or current.status != AttendanceStatus.PRESENT
            or current.entry_time is None
            or current.exit_time is not None
        ):
            return False
        self.records[record_id] = dataclasses.replace(current, exit_time=exit_time)
        return True

    def replace_record(self, *, record_id, entry_time, exit_time, status, shift, observations) -> bool:
        current = self.records.get(record_id)
        if current is None:
            return False
        self.records[record_id] = dataclasses.replace(
            current,
            entry_time=entry_time,
            exit_time=exit_time,
            status=status,
            shift=shift,
            observations=observations,
        )
        return True

    def update_observations(self, *, record_id: int, observations: Optional[str]) -> bool:
        current = self.records.get(record_id)
        if current is None:
            return False
        self.records[record_id] = dataclasses.replace(current, observations=observations)
        return True

    def delete(self, record_id: int) -> bool:
        return self.records.pop(record_id, None) is not None

    def delete_for_employee(self, employee_id: int) -> int:
        ids = [rid for rid, r in self.records.items() if r.employee_id == employee_id]
        for rid in ids:
            del self.records[rid]
        return len(ids)

    def list_records(self, *, employee_id=None, start_date=None, end_date=None):
        items = [
            r for r in self.records.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        return sorted(items, key=lambda r: (r.work_date, r.employee_id))


class InMemoryUsers:
    def __init__(self, users=()):
        self.users: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        current = self.users.get(user_id)
        if current is None:
            return False
        self.users[user_id] = dataclasses.replace(current, password_hash=password_hash)
        return True


def make_user(user_id: int, username: str, role: Role, password: str = "secret123", is_active: bool = True) -> User:
    return User(
        user_id=user_id,
        full_name=username.title(),
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        is_active=is_active,
    )


@pytest.fixture
def fixed_now():
    # Wednesday
    return datetime(2024, 1, 10, 8, 0, 42)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def users_repo():
    return InMemoryUsers([
        make_user(1, "admin", Role.ADMIN),
        make_user(2, "gerente", Role.MANAGER),
        make_user(3, "joao", Role.EMPLOYEE),
        make_user(4, "inativo", Role.EMPLOYEE, is_active=False),
    ])


@pytest.fixture
def container(users_repo, employees_repo, attendance_repo):
    return wire_services(
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        token_secret="test-secret",
        token_ttl_hours=1,
    )


@pytest.fixture
def app(monkeypatch, container):
    from src.time_clock.time_clock.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_header(client):
    def _login(username: str = "admin", password: str = "secret123") -> dict:
        resp = client.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _login
