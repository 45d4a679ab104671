"""
Data model exports for gopackage.

Example:
    >>> from gopackage.models import DepsRecord
"""

from __future__ import annotations

from gopackage.models.record import DepsRecord

__all__ = [
    "DepsRecord",
]
