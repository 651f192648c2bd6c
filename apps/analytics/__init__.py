"""Analytics app package: read-only dashboard aggregations."""
