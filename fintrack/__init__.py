"""
Personal Finance Tracker - Source Package

A local, single-user finance tracker: income and expense transactions,
receipt-style itemised expenses, categories, payment methods and
monthly summaries.

DESIGN PRINCIPLES:
1. The whole data set is one JSON document
2. Records are immutable values related by id
3. Form validation blocks, it never raises
4. Storage failures degrade to a fallback store
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
