"""
Expense Tracker - Source Package

Records personal expenses, keeps them as a single blob in a flat
preferences store, and summarizes them.

DESIGN PRINCIPLES:
1. Records are immutable once created
2. The whole collection is saved after every change
3. Bad persisted data is dropped, never fatal
4. Rejected input creates nothing
5. Storage layer is swappable
"""

__version__ = "1.0.0"
