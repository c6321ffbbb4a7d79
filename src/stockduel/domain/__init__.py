"""Domain layer: records, derived metrics and comparison results."""
