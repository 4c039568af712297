"""
Personal Accountant - Transaction Store Package

A small personal finance tracker: record income and expense
transactions, view totals and category breakdowns, filter history
and export it as CSV.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. Every mutation is persisted before it returns
3. Derived figures are recomputed, never cached
4. No silent data loss on save
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Accountant Team"
