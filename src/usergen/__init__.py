"""Synthetic user generation and persistence.

Generates plausible user records (names, emails, phone numbers, birth dates),
stores them in a relational ``Users`` table and renders the stored rows.
"""

__version__ = "0.1.0"
