from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

from ..core.enums import Role
from ..users.repository import UserRepository
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

DEMO_USERS = (
    {
        "name": "Admin User",
        "email": "admin@techflow.com",
        "role": Role.ADMIN,
        "department": "Management",
        "designation": "System Admin",
        "base_salary": 1_200_000,
        "join_date": date(2022, 1, 1),
    },
    {
        "name": "Rahul Manager",
        "email": "manager@techflow.com",
        "role": Role.MANAGER,
        "department": "Engineering",
        "designation": "Engineering Manager",
        "base_salary": 1_800_000,
        "join_date": date(2022, 3, 15),
    },
    {
        "name": "Priya Sharma",
        "email": "priya@techflow.com",
        "role": Role.EMPLOYEE,
        "department": "Engineering",
        "designation": "Frontend Developer",
        "base_salary": 800_000,
        "join_date": date(2023, 6, 10),
    },
    {
        "name": "Amit Singh",
        "email": "amit@techflow.com",
        "role": Role.EMPLOYEE,
        "department": "Marketing",
        "designation": "SEO Specialist",
        "base_salary": 600_000,
        "join_date": date(2023, 7, 22),
    },
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
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
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema ready (%s)", conn_factory.config.database)


def seed_demo_users(users: UserRepository) -> int:
    """Create the demo directory entries that are missing. Returns how many were added."""
    added = 0
    for data in DEMO_USERS:
        if users.get_by_email(data["email"]):
            continue
        users.create_user(**data)
        added += 1
    if added:
        logger.info("Seeded %s demo users", added)
    return added


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
