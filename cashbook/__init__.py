"""
Cashbook - Source Package

The reporting core of a cash-basis accounting system for a small
business that runs royalty, interest-lending and chit-fund lines next to
a handful of side businesses.

DESIGN PRINCIPLES:
1. Reports are pure functions of an immutable snapshot
2. Every figure is reproducible from the payment log
3. Inconsistencies are reported as values, never silently fixed
4. Every report is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Cashbook Team"
