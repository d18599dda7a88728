from __future__ import annotations

from src.time_clock.time_clock.employees.mysql_employee_repository import MySQLEmployeeRepository


class RecordingCursor:
    def __init__(self):
        self.statements: list[str] = []
        self.rowcount = 1

    def execute(self, sql, params=()):
        self.statements.append(" ".join(sql.split()))

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor
        self.commits = 0

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingFactory:
    def __init__(self):
        self.cursor = RecordingCursor()
        self.connections: list[RecordingConnection] = []

    def connect(self, *, with_database: bool = True):
        conn = RecordingConnection(self.cursor)
        self.connections.append(conn)
        return conn


def test_delete_removes_history_and_employee_in_one_transaction():
    factory = RecordingFactory()

    assert MySQLEmployeeRepository(factory).delete(7) is True

    assert len(factory.connections) == 1
    assert factory.connections[0].commits == 1
    assert factory.cursor.statements == [
        "DELETE FROM attendance_records WHERE employee_id=%s",
        "DELETE FROM employees WHERE employee_id=%s",
    ]
