"""Aggregation module for module outcome summaries.

- Folds grouped store rows into one summary per module
- Forbidden: database access, HTTP concerns
"""
