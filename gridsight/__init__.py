"""
Load signal conditioning and forecast reconciliation.
"""

__version__ = "0.1.0"
