"""
API Routes for Suburb Pulse

Provides REST API endpoints for:
- Sales count and listing
- Suburb rankings, search and detail
- Outlier detection
- Prediction feature table
- Aggregate rebuild
"""

import math

from flask import Blueprint, current_app, jsonify, request

from suburbpulse.analytics import (
    build_prediction_features,
    compute_suburb_aggregates,
    detect_outliers,
    rank_suburbs,
    suburb_detail,
)
from suburbpulse.config import get_config
from suburbpulse.core.constants import (
    API_OUTLIER_LIMIT,
    API_RANK_LIMIT,
    DEFAULT_RANK_COLUMN,
)
from suburbpulse.core.store import SaleStore
from suburbpulse.exceptions import DatabaseError, ValidationError
from suburbpulse.logging_config import get_logger

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")


def get_store() -> SaleStore:
    """Store bound to the database configured on the running app."""
    return SaleStore(current_app.config.get("DATABASE_PATH"))


def _int_arg(name: str, default: int, minimum: int = 1) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", field=name, value=raw)
    if value < minimum:
        raise ValidationError(f"{name} must be at least {minimum}", field=name, value=raw)
    return value


def _float_arg(name: str, default: float) -> float:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number", field=name, value=raw)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number", field=name, value=raw)
    if value <= 0:
        raise ValidationError(f"{name} must be positive", field=name, value=raw)
    return value


@api.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({"status": "error", "error": e.message, "field": e.field}), 400


@api.errorhandler(DatabaseError)
def handle_database_error(e: DatabaseError):
    logger.error("Database error: %s", e)
    return jsonify({"status": "error", "error": e.message}), 500


# Health
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    store = get_store()
    return jsonify({
        "status": "healthy",
        "sales_count": store.count_sales(),
    })


# Sales
@api.route("/stats", methods=["GET"])
def get_stats():
    """Total number of stored sales."""
    return jsonify({
        "status": "success",
        "salesCount": get_store().count_sales(),
    })


@api.route("/sales", methods=["GET"])
def get_sales():
    """Current-window sales, most recent first."""
    limit = _int_arg("limit", default=0, minimum=0)
    window = get_config().analysis.window()
    sales = get_store().list_sales(start=window.current_start, limit=limit or None)
    return jsonify({
        "status": "success",
        "count": len(sales),
        "sales": sales,
    })


# Suburbs
@api.route("/suburbs", methods=["GET"])
def get_suburbs():
    """Suburb rankings."""
    sort_by = request.args.get("sortBy", DEFAULT_RANK_COLUMN)
    order = request.args.get("order", "DESC")
    limit = _int_arg("limit", default=API_RANK_LIMIT)

    rankings = rank_suburbs(get_store(), sort_by=sort_by, order=order, limit=limit)
    return jsonify({
        "status": "success",
        "count": len(rankings),
        "suburbs": [agg.to_dict() for agg in rankings],
    })


@api.route("/suburbs/<suburb>/<postcode>", methods=["GET"])
def get_suburb_detail(suburb: str, postcode: str):
    """Statistics, recent sales and monthly trend for one suburb."""
    detail = suburb_detail(get_store(), suburb, postcode)
    if detail["aggregate"] is None:
        return jsonify({"status": "error", "error": "Suburb not found"}), 404

    return jsonify({
        "status": "success",
        "stats": detail["aggregate"].to_dict(),
        "recentSales": detail["recent_sales"],
        "priceTrend": detail["monthly_trend"],
    })


@api.route("/search", methods=["GET"])
def search():
    """Search suburbs by name or postcode."""
    query = request.args.get("q", "")
    return jsonify({
        "status": "success",
        "results": get_store().search_suburbs(query),
    })


# Analytics
@api.route("/outliers", methods=["GET"])
def get_outliers():
    """Under- and over-priced sales by price per square metre."""
    threshold = _float_arg("threshold", default=get_config().analysis.outlier_threshold)
    limit = _int_arg("limit", default=API_OUTLIER_LIMIT)

    report = detect_outliers(get_store(), threshold=threshold, limit=limit)
    return jsonify({"status": "success", **report.to_dict()})


@api.route("/prediction-stats", methods=["GET"])
def get_prediction_stats():
    """Monthly price-per-area table by postcode prefix."""
    rows = build_prediction_features(get_store())
    return jsonify({
        "status": "success",
        "count": len(rows),
        "stats": [row.to_dict() for row in rows],
    })


@api.route("/recompute", methods=["POST"])
def recompute():
    """Rebuild suburb statistics and momentum scores."""
    aggregates = compute_suburb_aggregates(get_store())
    scored = sum(1 for agg in aggregates if agg.momentum_score is not None)
    return jsonify({
        "status": "success",
        "suburbs": len(aggregates),
        "scored": scored,
    })


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"status": "error", "error": "Not found"}), 404

    logger.info("API routes registered")
