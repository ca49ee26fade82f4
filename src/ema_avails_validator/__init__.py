"""Validation of EMA avails metadata workbooks."""

__version__ = "0.1.0"
