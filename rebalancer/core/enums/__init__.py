"""
Core enumerations for the rebalancer.

This module provides centralized enumerations for drift classification
and trade direction.
"""

from .allocation_status import AllocationStatus, TradeAction

__all__ = ["AllocationStatus", "TradeAction"]
