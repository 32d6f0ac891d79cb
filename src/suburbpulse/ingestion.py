"""
Sale Ingestion

Loads already-parsed sale records (one row per settled sale) from CSV,
normalizes them into ``Sale`` values and stores them. Rows with no usable
price, suburb, postcode or settlement date are rejected here so the
analytics modules only ever see clean numbers.

Expected CSV columns (extra columns are ignored):
    suburb, postcode, price, settlement_date            required
    id, property_id, address, land_area, contract_date,
    zone_code, property_type, property_desc             optional
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from suburbpulse.core.models import Sale
from suburbpulse.core.store import SaleStore
from suburbpulse.exceptions import IngestionError
from suburbpulse.logging_config import get_logger
from suburbpulse.utils.date_parser import to_date_key
from suburbpulse.utils.price_parser import extract_price_value, parse_area

logger = get_logger(__name__)

BATCH_SIZE = 1000


@dataclass
class IngestionResult:
    """Counts from one import run."""

    processed: int = 0
    inserted: int = 0
    rejected: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processed": self.processed,
            "inserted": self.inserted,
            "rejected": self.rejected,
        }


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_sale(record: Mapping[str, Any], source_file: Optional[str] = None) -> Sale:
    """Turn one parsed record into a ``Sale``.

    Raises:
        IngestionError: When a required field is missing or invalid.
    """
    suburb = _clean(record.get("suburb"))
    postcode = _clean(record.get("postcode"))
    if not suburb or not postcode:
        raise IngestionError("Missing suburb or postcode", row=dict(record))

    price = extract_price_value(record.get("price"))
    if price is None:
        raise IngestionError(f"Invalid price: {record.get('price')!r}", row=dict(record))

    settlement_date = to_date_key(record.get("settlement_date"))
    if settlement_date is None:
        raise IngestionError(
            f"Invalid settlement date: {record.get('settlement_date')!r}", row=dict(record)
        )

    property_id = _clean(record.get("property_id"))
    sale_id = _clean(record.get("id"))
    if sale_id is None:
        sale_id = "-".join(
            part for part in (property_id or suburb.upper(), _clean(record.get("address")),
                              settlement_date, source_file) if part
        )

    return Sale(
        id=sale_id,
        suburb=suburb.upper(),
        postcode=postcode,
        price=price,
        land_area=parse_area(record.get("land_area")),
        settlement_date=settlement_date,
        property_id=property_id,
        address=_clean(record.get("address")),
        contract_date=to_date_key(record.get("contract_date")),
        zone_code=_clean(record.get("zone_code")),
        property_type=_clean(record.get("property_type")),
        property_desc=_clean(record.get("property_desc")),
        source_file=source_file,
    )


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    source_file: Optional[str] = None,
    result: Optional[IngestionResult] = None,
) -> List[Sale]:
    """Normalize records, counting and logging the ones that are rejected."""
    if result is None:
        result = IngestionResult()

    sales = []
    for record in records:
        result.processed += 1
        try:
            sales.append(normalize_sale(record, source_file=source_file))
        except IngestionError as e:
            result.rejected += 1
            result.errors.append(e.message)
            logger.debug("Rejected record: %s", e.message)
    return sales


def import_csv(
    store: SaleStore,
    csv_path: Union[str, Path],
    batch_size: int = BATCH_SIZE,
) -> IngestionResult:
    """Load a CSV of sale records into the store in batches.

    Raises:
        IngestionError: If the file does not exist.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise IngestionError(f"CSV file not found: {csv_path}")

    logger.info("Starting ingestion from %s", csv_path)
    store.init_schema()

    result = IngestionResult()
    for chunk in pd.read_csv(csv_path, chunksize=batch_size, dtype=str):
        records = chunk.astype(object).where(pd.notnull(chunk), None).to_dict("records")
        sales = normalize_records(records, source_file=csv_path.name, result=result)
        result.inserted += store.insert_sales(sales)

    logger.info(
        "Imported %d sales from %s (%d rejected)",
        result.inserted, csv_path.name, result.rejected,
    )
    return result
