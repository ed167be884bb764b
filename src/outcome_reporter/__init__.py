"""Module Outcome Reporter.

Reports per-module task counts, success counts and time-to-first-byte
percentiles from the task result store for a client or provider and day.
"""

__version__ = "0.1.0"
