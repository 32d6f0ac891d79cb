"""
Database Helper Functions

Provides context managers, schema setup and helper functions for SQLite
database operations.

Usage:
    from suburbpulse.core.database import get_connection, fetch_all

    with get_connection() as conn:
        results = fetch_all(conn, "SELECT * FROM sales")
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Tuple, Union

from suburbpulse.config import get_config
from suburbpulse.core.constants import TABLE_SALES, TABLE_SUBURB_STATS
from suburbpulse.exceptions import DatabaseConnectionError, DatabaseError
from suburbpulse.logging_config import get_logger

logger = get_logger(__name__)

# Type aliases
Row = Dict[str, Any]
Params = Union[Tuple, Dict[str, Any], None]

SCHEMA_STATEMENTS = [
    f"""
    CREATE TABLE IF NOT EXISTS {TABLE_SALES} (
        id TEXT PRIMARY KEY,
        property_id TEXT,
        address TEXT,
        suburb TEXT NOT NULL,
        postcode TEXT NOT NULL,
        price INTEGER NOT NULL,
        land_area REAL DEFAULT 0,
        contract_date TEXT,
        settlement_date TEXT NOT NULL,
        zone_code TEXT,
        property_type TEXT,
        property_desc TEXT,
        price_per_area INTEGER,
        source_file TEXT,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
    """,
    f"CREATE INDEX IF NOT EXISTS idx_sales_suburb ON {TABLE_SALES}(suburb)",
    f"CREATE INDEX IF NOT EXISTS idx_sales_postcode ON {TABLE_SALES}(postcode)",
    f"CREATE INDEX IF NOT EXISTS idx_sales_settlement_date ON {TABLE_SALES}(settlement_date)",
    f"CREATE INDEX IF NOT EXISTS idx_sales_price ON {TABLE_SALES}(price)",
    f"""
    CREATE TABLE IF NOT EXISTS {TABLE_SUBURB_STATS} (
        suburb TEXT NOT NULL,
        postcode TEXT NOT NULL,
        sales_count INTEGER,
        total_value INTEGER,
        median_price INTEGER,
        avg_price INTEGER,
        min_price INTEGER,
        max_price INTEGER,
        avg_price_per_area INTEGER,
        prior_sales_count INTEGER,
        prior_median_price INTEGER,
        growth_pct REAL,
        PRIMARY KEY (suburb, postcode)
    )
    """,
    f"CREATE INDEX IF NOT EXISTS idx_suburb_stats_suburb ON {TABLE_SUBURB_STATS}(suburb)",
]


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> Dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


@contextmanager
def get_connection(
    db_path: Optional[str] = None,
    as_dict: bool = True,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Args:
        db_path: Path to database file. Uses config default if not specified.
        as_dict: If True, rows are returned as dictionaries.

    Yields:
        SQLite connection object.

    Raises:
        DatabaseConnectionError: If unable to connect to the database.
    """
    if db_path is None:
        db_path = get_config().database.path

    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = None
    try:
        conn = sqlite3.connect(db_path)
        if as_dict:
            conn.row_factory = dict_factory
        else:
            conn.row_factory = sqlite3.Row
        logger.debug("Connected to database: %s", db_path)
        yield conn
    except sqlite3.Error as e:
        logger.error("Database connection error: %s", e)
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e
    finally:
        if conn:
            conn.close()
            logger.debug("Closed database connection")


@contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    """Run the enclosed statements as one all-or-nothing unit.

    Commits when the block exits cleanly and rolls back on any exception, so
    readers on other connections see either every change or none of them.
    Statements inside the block must not commit on their own.
    """
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn
    except BaseException:
        conn.rollback()
        logger.warning("Transaction rolled back")
        raise
    else:
        conn.commit()


def fetch_all(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
) -> List[Row]:
    """Execute a query and fetch all results.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        return cursor.fetchall()
    except sqlite3.Error as e:
        logger.error("Query failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Query failed: {e}") from e


def fetch_one(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
) -> Optional[Row]:
    """Execute a query and fetch one result, or None if there are no rows.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        return cursor.fetchone()
    except sqlite3.Error as e:
        logger.error("Query failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Query failed: {e}") from e


def execute(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
    commit: bool = True,
) -> int:
    """Execute a query (INSERT, UPDATE, DELETE).

    Args:
        conn: Database connection.
        query: SQL query string.
        params: Query parameters (tuple or dict).
        commit: If True, commit the transaction. Pass False inside
            ``transaction()``.

    Returns:
        Number of rows affected.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        if commit:
            conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Execute failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Execute failed: {e}") from e


def execute_many(
    conn: sqlite3.Connection,
    query: str,
    params_list: List[Params],
    commit: bool = True,
) -> int:
    """Execute a query once per parameter set.

    Returns:
        Total number of rows affected.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        cursor.executemany(query, params_list)
        if commit:
            conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Execute many failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Execute many failed: {e}") from e


def table_exists(conn: sqlite3.Connection, table_name: str) -> bool:
    """Check if a table exists in the database."""
    result = fetch_one(
        conn,
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (table_name,),
    )
    return result is not None


def add_column_if_not_exists(
    conn: sqlite3.Connection,
    table_name: str,
    column_name: str,
    column_type: str,
    default: Optional[str] = None,
) -> bool:
    """Add a column to a table if it doesn't exist.

    Returns:
        True if column was added, False if it already existed.
    """
    columns = fetch_all(conn, f"PRAGMA table_info({table_name})")
    column_names = [col["name"] for col in columns]

    if column_name in column_names:
        return False

    default_clause = f" DEFAULT {default}" if default is not None else ""
    query = f"ALTER TABLE {table_name} ADD COLUMN {column_name} {column_type}{default_clause}"

    execute(conn, query)
    logger.info("Added column %s to table %s", column_name, table_name)
    return True


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the sales and suburb statistics tables if missing.

    ``momentum_score`` is added through a migration so databases created
    before scoring existed pick it up too.
    """
    if not table_exists(conn, TABLE_SALES):
        logger.info("Initialising new sales database")
    for statement in SCHEMA_STATEMENTS:
        execute(conn, statement, commit=False)
    conn.commit()
    add_column_if_not_exists(conn, TABLE_SUBURB_STATS, "momentum_score", "INTEGER")
