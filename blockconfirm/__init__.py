"""Blockchain event and transaction data types, and a non-blocking block hash event buffer."""

__version__ = "0.1.0"
__all__ = ["blocklistener", "chaintypes"]