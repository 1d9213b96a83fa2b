"""
Bulk statement builders.

Every write of the importer is a single multi-row INSERT in one of three
shapes:

- plain insert
- upsert: insert, overwrite chosen columns when a unique key already exists
  (MySQL ON DUPLICATE KEY UPDATE, SQLite/PostgreSQL ON CONFLICT DO UPDATE)
- collision-tolerant insert: rows violating a unique key are dropped
  (MySQL INSERT IGNORE, SQLite/PostgreSQL ON CONFLICT DO NOTHING)

Tables are looked up by name in the model registry, so the writers only
need the table names from the metadata snapshot.
"""

from typing import Any, Dict, List, Sequence

from sqlalchemy import Table
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from ..models import Base
from .exceptions import MetaDataError, UnsupportedDialectError
from .logging_utils import get_service_logger

logger = get_service_logger(__name__)

MYSQL_DIALECTS = ("mysql", "mariadb")

Row = Dict[str, Any]


def get_table(table_name: str) -> Table:
    """
    Look up a store table by name.

    Raises:
        MetaDataError: If no model defines the table
    """
    table = Base.metadata.tables.get(table_name)
    if table is None:
        raise MetaDataError(f"unknown table '{table_name}'")
    return table


def get_dialect_name(session: Session) -> str:
    """Name of the SQL dialect the session is bound to."""
    return session.get_bind().dialect.name


def _insert(session: Session, table: Table):
    dialect_name = get_dialect_name(session)
    if dialect_name in MYSQL_DIALECTS:
        return mysql.insert(table)
    if dialect_name == "postgresql":
        return postgresql.insert(table)
    if dialect_name == "sqlite":
        return sqlite.insert(table)
    raise UnsupportedDialectError(dialect_name)


def bulk_insert(session: Session, table_name: str, rows: List[Row]) -> int:
    """
    Insert all rows with one statement.

    Returns:
        Number of rows reported by the driver
    """
    if not rows:
        return 0
    table = get_table(table_name)
    stmt = _insert(session, table).values(rows)
    result = session.execute(stmt)
    logger.debug(f"Inserted {len(rows)} rows into {table_name}")
    return result.rowcount


def bulk_upsert(
    session: Session,
    table_name: str,
    rows: List[Row],
    key_columns: Sequence[str],
    update_columns: Sequence[str],
) -> int:
    """
    Insert all rows with one statement, overwriting update_columns of rows
    whose key already exists.

    Args:
        session: Database session
        table_name: Target table
        rows: Row dictionaries, all with the same keys
        key_columns: Unique key the conflict is detected on
        update_columns: Columns overwritten from the new row on conflict

    Returns:
        Number of rows reported by the driver
    """
    if not rows:
        return 0
    table = get_table(table_name)
    stmt = _insert(session, table).values(rows)

    if get_dialect_name(session) in MYSQL_DIALECTS:
        stmt = stmt.on_duplicate_key_update({column: stmt.inserted[column] for column in update_columns})
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(key_columns),
            set_={column: stmt.excluded[column] for column in update_columns},
        )

    result = session.execute(stmt)
    logger.debug(f"Upserted {len(rows)} rows into {table_name}")
    return result.rowcount


def bulk_insert_ignore(session: Session, table_name: str, rows: List[Row]) -> int:
    """
    Insert all rows with one statement, silently dropping rows that collide
    with a unique key.

    Returns:
        Number of rows reported by the driver
    """
    if not rows:
        return 0
    table = get_table(table_name)

    if get_dialect_name(session) in MYSQL_DIALECTS:
        stmt = _insert(session, table).prefix_with("IGNORE").values(rows)
    else:
        stmt = _insert(session, table).values(rows).on_conflict_do_nothing()

    result = session.execute(stmt)
    logger.debug(f"Inserted {len(rows)} rows into {table_name} (duplicates ignored)")
    return result.rowcount
