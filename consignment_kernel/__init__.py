"""
Consignment Kernel

Shared infrastructure for the consignor ledger:
- Structured JSON logging with request-scoped context
- Typed exception hierarchy
- Injectable clock
- SQLAlchemy models and read-only selectors scoped by organization
"""

__version__ = "0.1.0"
