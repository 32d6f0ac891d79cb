"""
Sale Store

SQLite-backed table of normalized sales plus the materialized suburb
statistics table. The analytics modules only talk to the store through the
methods here: filtered scans, grouped trend queries, bulk insert and the
atomic aggregate snapshot replace.
"""

from typing import Dict, Iterable, List, Optional

from suburbpulse.config import get_config
from suburbpulse.core.constants import (
    DEFAULT_RANK_COLUMN,
    MIN_SEARCH_QUERY_LENGTH,
    RANKABLE_COLUMNS,
    RECENT_SALES_LIMIT,
    SEARCH_RESULT_LIMIT,
    TABLE_SALES,
    TABLE_SUBURB_STATS,
)
from suburbpulse.core.database import (
    Row,
    execute,
    execute_many,
    fetch_all,
    fetch_one,
    get_connection,
    init_schema,
    transaction,
)
from suburbpulse.core.models import Sale, SuburbAggregate
from suburbpulse.logging_config import get_logger

logger = get_logger(__name__)

SALE_COLUMNS = [
    "id",
    "property_id",
    "address",
    "suburb",
    "postcode",
    "price",
    "land_area",
    "contract_date",
    "settlement_date",
    "zone_code",
    "property_type",
    "property_desc",
    "price_per_area",
    "source_file",
]

AGGREGATE_COLUMNS = [
    "suburb",
    "postcode",
    "sales_count",
    "total_value",
    "median_price",
    "avg_price",
    "min_price",
    "max_price",
    "avg_price_per_area",
    "prior_sales_count",
    "prior_median_price",
    "growth_pct",
    "momentum_score",
]


def _placeholders(columns: List[str]) -> str:
    return ", ".join("?" for _ in columns)


class SaleStore:
    """Queryable table of sales backed by a SQLite file."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or get_config().database.path

    def connect(self):
        return get_connection(self.db_path)

    def init_schema(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        with self.connect() as conn:
            init_schema(conn)
        logger.debug("Schema ready at %s", self.db_path)

    # Sales

    def insert_sales(self, sales: Iterable[Sale]) -> int:
        """Insert or replace sales by id in a single transaction.

        Returns:
            Number of sales written.
        """
        rows = [
            tuple(getattr(sale, col) for col in SALE_COLUMNS)
            for sale in sales
        ]
        if not rows:
            return 0

        query = (
            f"INSERT OR REPLACE INTO {TABLE_SALES} ({', '.join(SALE_COLUMNS)}) "
            f"VALUES ({_placeholders(SALE_COLUMNS)})"
        )
        with self.connect() as conn:
            with transaction(conn):
                execute_many(conn, query, rows, commit=False)
        logger.info("Stored %d sales", len(rows))
        return len(rows)

    def count_sales(self) -> int:
        with self.connect() as conn:
            result = fetch_one(conn, f"SELECT COUNT(*) AS count FROM {TABLE_SALES}")
        return result["count"] if result else 0

    def scan_sales(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        suburb: Optional[str] = None,
        postcode: Optional[str] = None,
        require_area: bool = False,
    ) -> List[Sale]:
        """Return sales matching the filters, oldest settlement first.

        Args:
            start: Inclusive ``YYYYMMDD`` lower bound on settlement date.
            end: Exclusive ``YYYYMMDD`` upper bound on settlement date.
            suburb: Case-insensitive suburb name.
            postcode: Exact postcode.
            require_area: Only sales with a known land area and price per area.
        """
        clauses = []
        params: list = []
        if start:
            clauses.append("settlement_date >= ?")
            params.append(start)
        if end:
            clauses.append("settlement_date < ?")
            params.append(end)
        if suburb:
            clauses.append("UPPER(suburb) = UPPER(?)")
            params.append(suburb)
        if postcode:
            clauses.append("postcode = ?")
            params.append(postcode)
        if require_area:
            clauses.append("land_area > 0 AND price_per_area IS NOT NULL AND price_per_area > 0")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        query = (
            f"SELECT {', '.join(SALE_COLUMNS)} FROM {TABLE_SALES} {where} "
            "ORDER BY settlement_date, id"
        )
        with self.connect() as conn:
            rows = fetch_all(conn, query, tuple(params))
        return [Sale.from_row(row) for row in rows]

    def list_sales(self, start: Optional[str] = None, limit: Optional[int] = None) -> List[Row]:
        """Sales from ``start`` onwards, most recent settlement first."""
        query = f"SELECT * FROM {TABLE_SALES}"
        params: list = []
        if start:
            query += " WHERE settlement_date >= ?"
            params.append(start)
        query += " ORDER BY settlement_date DESC, id"
        if limit:
            query += " LIMIT ?"
            params.append(limit)
        with self.connect() as conn:
            return fetch_all(conn, query, tuple(params))

    def recent_sales(
        self,
        suburb: str,
        postcode: str,
        limit: int = RECENT_SALES_LIMIT,
    ) -> List[Row]:
        with self.connect() as conn:
            return fetch_all(conn, f"""
                SELECT * FROM {TABLE_SALES}
                WHERE UPPER(suburb) = UPPER(?) AND postcode = ?
                ORDER BY settlement_date DESC, id
                LIMIT ?
            """, (suburb, postcode, limit))

    def monthly_price_trend(self, suburb: str, postcode: str) -> List[Row]:
        """Monthly count and price range for one suburb across all its sales."""
        with self.connect() as conn:
            return fetch_all(conn, f"""
                SELECT
                    SUBSTR(settlement_date, 1, 6) AS month,
                    COUNT(*) AS sales_count,
                    AVG(price) AS avg_price,
                    MIN(price) AS min_price,
                    MAX(price) AS max_price
                FROM {TABLE_SALES}
                WHERE UPPER(suburb) = UPPER(?) AND postcode = ?
                GROUP BY SUBSTR(settlement_date, 1, 6)
                ORDER BY month
            """, (suburb, postcode))

    # Suburb statistics

    def replace_aggregates(self, aggregates: Iterable[SuburbAggregate]) -> int:
        """Swap in a new suburb statistics snapshot.

        The delete and the inserts share one transaction: if anything fails
        the previous snapshot is left untouched.
        """
        rows = [
            tuple(getattr(agg, col) for col in AGGREGATE_COLUMNS)
            for agg in aggregates
        ]
        query = (
            f"INSERT INTO {TABLE_SUBURB_STATS} ({', '.join(AGGREGATE_COLUMNS)}) "
            f"VALUES ({_placeholders(AGGREGATE_COLUMNS)})"
        )
        with self.connect() as conn:
            with transaction(conn):
                execute(conn, f"DELETE FROM {TABLE_SUBURB_STATS}", commit=False)
                if rows:
                    execute_many(conn, query, rows, commit=False)
        logger.info("Replaced suburb statistics with %d rows", len(rows))
        return len(rows)

    def fetch_aggregates(self) -> List[SuburbAggregate]:
        """All suburb statistics rows ordered by suburb and postcode."""
        with self.connect() as conn:
            rows = fetch_all(conn, f"""
                SELECT {', '.join(AGGREGATE_COLUMNS)} FROM {TABLE_SUBURB_STATS}
                ORDER BY suburb, postcode
            """)
        return [SuburbAggregate.from_row(row) for row in rows]

    def rank_aggregates(
        self,
        sort_by: str = DEFAULT_RANK_COLUMN,
        order: str = "DESC",
        limit: int = 100,
    ) -> List[SuburbAggregate]:
        """Suburb statistics ordered by one of the rankable columns.

        Unknown columns fall back to ``median_price``; any order other than
        ``ASC`` is treated as ``DESC``.
        """
        column = sort_by if sort_by in RANKABLE_COLUMNS else DEFAULT_RANK_COLUMN
        direction = "ASC" if str(order).upper() == "ASC" else "DESC"
        with self.connect() as conn:
            rows = fetch_all(conn, f"""
                SELECT {', '.join(AGGREGATE_COLUMNS)} FROM {TABLE_SUBURB_STATS}
                ORDER BY {column} {direction}, suburb, postcode
                LIMIT ?
            """, (limit,))
        return [SuburbAggregate.from_row(row) for row in rows]

    def get_aggregate(self, suburb: str, postcode: str) -> Optional[SuburbAggregate]:
        with self.connect() as conn:
            row = fetch_one(conn, f"""
                SELECT {', '.join(AGGREGATE_COLUMNS)} FROM {TABLE_SUBURB_STATS}
                WHERE UPPER(suburb) = UPPER(?) AND postcode = ?
            """, (suburb, postcode))
        return SuburbAggregate.from_row(row) if row else None

    def search_suburbs(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[Dict]:
        """Suburbs whose name or postcode contains ``query``, busiest first."""
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []
        pattern = f"%{query}%"
        with self.connect() as conn:
            return fetch_all(conn, f"""
                SELECT DISTINCT suburb, postcode, sales_count, median_price
                FROM {TABLE_SUBURB_STATS}
                WHERE suburb LIKE ? OR postcode LIKE ?
                ORDER BY sales_count DESC, suburb
                LIMIT ?
            """, (pattern, pattern, limit))
