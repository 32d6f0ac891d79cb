"""
Data Models for Suburb Pulse

Dataclass definitions for sales and the statistics derived from them.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from suburbpulse.core.constants import POSTCODE_PREFIX_LENGTH
from suburbpulse.utils.price_parser import calculate_price_per_area


def postcode_prefix(postcode: str) -> str:
    """Coarse geographic bucket: the first three characters of a postcode."""
    return str(postcode or "")[:POSTCODE_PREFIX_LENGTH]


@dataclass(frozen=True)
class Sale:
    """A single settled property sale. Immutable once ingested."""

    id: str
    suburb: str
    postcode: str
    price: int
    land_area: float
    settlement_date: str  # YYYYMMDD
    price_per_area: Optional[int] = None
    property_id: Optional[str] = None
    address: Optional[str] = None
    contract_date: Optional[str] = None
    zone_code: Optional[str] = None
    property_type: Optional[str] = None
    property_desc: Optional[str] = None
    source_file: Optional[str] = None

    def __post_init__(self):
        if self.price_per_area is None:
            object.__setattr__(
                self,
                "price_per_area",
                calculate_price_per_area(self.price, self.land_area),
            )

    @property
    def postcode_prefix(self) -> str:
        return postcode_prefix(self.postcode)

    @property
    def has_area(self) -> bool:
        return bool(self.land_area) and self.land_area > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["postcode_prefix"] = self.postcode_prefix
        return data

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Sale":
        """Build a sale from a ``sales`` table row."""
        return cls(
            id=row["id"],
            suburb=row["suburb"],
            postcode=row["postcode"],
            price=row["price"],
            land_area=row["land_area"] or 0.0,
            settlement_date=row["settlement_date"],
            price_per_area=row.get("price_per_area"),
            property_id=row.get("property_id"),
            address=row.get("address"),
            contract_date=row.get("contract_date"),
            zone_code=row.get("zone_code"),
            property_type=row.get("property_type"),
            property_desc=row.get("property_desc"),
            source_file=row.get("source_file"),
        )


@dataclass
class SuburbAggregate:
    """Per-suburb market statistics, rebuilt wholesale on every run."""

    suburb: str
    postcode: str
    sales_count: int
    total_value: int
    median_price: int
    avg_price: int
    min_price: int
    max_price: int
    avg_price_per_area: Optional[int] = None
    prior_sales_count: int = 0
    prior_median_price: Optional[int] = None
    growth_pct: float = 0.0
    momentum_score: Optional[int] = None

    @property
    def key(self):
        return (self.suburb, self.postcode)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SuburbAggregate":
        """Build an aggregate from a ``suburb_stats`` table row."""
        return cls(
            suburb=row["suburb"],
            postcode=row["postcode"],
            sales_count=row["sales_count"],
            total_value=row["total_value"],
            median_price=row["median_price"],
            avg_price=row["avg_price"],
            min_price=row["min_price"],
            max_price=row["max_price"],
            avg_price_per_area=row["avg_price_per_area"],
            prior_sales_count=row["prior_sales_count"],
            prior_median_price=row["prior_median_price"],
            growth_pct=row["growth_pct"],
            momentum_score=row["momentum_score"],
        )


@dataclass
class PrefixPriceStats:
    """Price-per-area distribution of one postcode prefix."""

    mean: float
    std: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class OutlierRecord:
    """A sale whose price per area sits far from its prefix mean."""

    sale: Sale
    expected_price_per_area: int
    z_score: float
    outlier_type: str  # "underpriced" or "overpriced"
    deviation_pct: int

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the sale and the outlier fields into one dictionary."""
        data = self.sale.to_dict()
        data.update(
            expected_price_per_area=self.expected_price_per_area,
            z_score=self.z_score,
            outlier_type=self.outlier_type,
            deviation_pct=self.deviation_pct,
        )
        return data


@dataclass
class OutlierReport:
    """Result of one outlier query."""

    outliers: list = field(default_factory=list)
    total_count: int = 0
    underpriced_count: int = 0
    overpriced_count: int = 0
    prefix_stats: Dict[str, PrefixPriceStats] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API response shape."""
        return {
            "outliers": [o.to_dict() for o in self.outliers],
            "totalOutliers": self.total_count,
            "underpricedCount": self.underpriced_count,
            "overpricedCount": self.overpriced_count,
            "prefixStats": {k: v.to_dict() for k, v in self.prefix_stats.items()},
        }


@dataclass
class PrefixMonthStats:
    """Monthly price-per-area summary for one postcode prefix."""

    postcode_prefix: str
    month: str  # YYYYMM
    sales_count: int
    avg_price_per_area: float
    min_price_per_area: int
    max_price_per_area: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
