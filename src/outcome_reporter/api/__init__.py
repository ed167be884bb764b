"""API module for the reporter.

- Validates inputs, reads the task result store
- Returns JSON summaries for the dashboard
"""
