"""
Token budget allocation.

Module structure:
- allocator.py: BudgetItem, BudgetResult and the greedy TokenBudgetAllocator
- priority.py: Entry point detection and allocation priority order
"""

from contextpack.services.budget.allocator import BudgetItem, BudgetResult, TokenBudgetAllocator
from contextpack.services.budget.priority import (
    boost_entry_points,
    is_entry_point,
    priority_order,
    rank_by_relevance,
)

__all__ = [
    "BudgetItem",
    "BudgetResult",
    "TokenBudgetAllocator",
    "boost_entry_points",
    "is_entry_point",
    "priority_order",
    "rank_by_relevance",
]
