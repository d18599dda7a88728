from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig


def _connect(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_dict(db_config)).connect(with_database=with_database)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def _upsert_account(cur, *, full_name: str, username: str, password: str, role: Role) -> None:
    password_hash = generate_password_hash(password)
    cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
    if cur.fetchone():
        cur.execute(
            "UPDATE users SET full_name=%s, password_hash=%s, role=%s, is_active=1 WHERE username=%s",
            (full_name, password_hash, role.value, username),
        )
    else:
        cur.execute(
            "INSERT INTO users(full_name, username, password_hash, role) VALUES(%s,%s,%s,%s)",
            (full_name, username, password_hash, role.value),
        )


def ensure_admin_user(db_config: dict, *, username: str, password: str) -> None:
    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)
        _upsert_account(cur, full_name="Administrador", username=username, password=password, role=Role.ADMIN)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_data(db_config: dict) -> None:
    """Demo manager account plus two employees with weekly schedules."""
    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)
        _upsert_account(cur, full_name="Gerente Demo", username="gerente", password="gerente123", role=Role.MANAGER)

        demo_employees = [
            ("Maria Souza", "Recepcionista", "1001", ["monday", "wednesday", "friday"]),
            ("João Lima", "Auxiliar Administrativo", "1002", ["monday", "tuesday", "wednesday", "thursday", "friday"]),
        ]
        for name, position, registration, work_days in demo_employees:
            cur.execute("SELECT employee_id FROM employees WHERE registration=%s", (registration,))
            if cur.fetchone():
                continue
            cur.execute(
                "INSERT INTO employees(name, position, registration) VALUES(%s,%s,%s)",
                (name, position, registration),
            )
            employee_id = int(cur.lastrowid)
            cur.executemany(
                "INSERT INTO employee_work_days(employee_id, weekday) VALUES(%s,%s)",
                [(employee_id, day) for day in work_days],
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
