"""Shared type aliases used across the domain."""
from __future__ import annotations

from typing import TypeAlias

RecordId: TypeAlias = int
Timestamp: TypeAlias = int  # Unix epoch milliseconds
