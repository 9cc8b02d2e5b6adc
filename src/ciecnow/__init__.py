"""CIEC Now - access control, fiscal periods and session coordination."""

__version__ = "0.1.0"
