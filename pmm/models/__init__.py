"""Pydantic models for pool state crossing the library boundary."""

from pmm.models.snapshot import PoolSnapshot
from pmm.models.types import Uint128, Uint256

__all__ = [
    # Types
    "Uint128",
    "Uint256",
    # Snapshots
    "PoolSnapshot",
]
