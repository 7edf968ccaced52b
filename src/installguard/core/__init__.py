"""Core evaluation engine: rules, line classification, scoring and aggregation."""
