"""
Command-line interface modules.

Provides CLI entry points for:
- api_server: Start the REST API
- import_sales: Load a CSV of sales and rebuild suburb statistics
- compute_stats: Rebuild suburb statistics and momentum scores
"""
