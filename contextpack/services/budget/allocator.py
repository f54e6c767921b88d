"""
TokenBudgetAllocator - greedy selection of files under a token ceiling.

A single forward pass over candidates in priority order. A candidate that
does not fit is recorded as excluded and the scan continues, so smaller
lower-priority candidates can still use the remaining budget. There is no
backtracking: an earlier inclusion is never traded for a better fit later.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BudgetItem:
    """One candidate offered to the allocator."""

    path: str
    tokens: int
    score: int | None = None  # Relevance score, when relevance is active
    payload: Any = None  # Opaque to the allocator; carried through to the result


@dataclass(frozen=True)
class BudgetResult:
    """Finalized allocation. Immutable once `allocate` returns."""

    max_tokens: int
    included: tuple[BudgetItem, ...]
    excluded: tuple[BudgetItem, ...]
    token_count: int  # Sum of included costs
    total_tokens: int  # Sum of every candidate's cost, for efficiency reporting

    @property
    def budget_too_low(self) -> bool:
        """Check if nothing fit although there were candidates to place."""
        return self.max_tokens > 0 and not self.included and bool(self.excluded)

    @property
    def smallest_excluded_cost(self) -> int:
        return min((item.tokens for item in self.excluded), default=0)

    @property
    def utilization(self) -> float:
        """Fraction of the budget used; 0.0 when the budget is unlimited."""
        if self.max_tokens <= 0:
            return 0.0
        return self.token_count / self.max_tokens


class TokenBudgetAllocator:
    """Greedy allocator. `max_tokens == 0` means unlimited."""

    def __init__(self, max_tokens: int = 0) -> None:
        if max_tokens < 0:
            raise ValueError(f"max_tokens must be >= 0, got {max_tokens}")
        self.max_tokens = max_tokens

    @property
    def unlimited(self) -> bool:
        return self.max_tokens == 0

    def allocate(self, items: Iterable[BudgetItem]) -> BudgetResult:
        """
        Partition items into included and excluded, preserving input order.

        Args:
            items: Candidates in priority order with precomputed token costs

        Returns:
            BudgetResult whose token_count never exceeds a positive max_tokens
        """
        included: list[BudgetItem] = []
        excluded: list[BudgetItem] = []
        running = 0
        total = 0

        for item in items:
            total += item.tokens
            if self.unlimited or running + item.tokens <= self.max_tokens:
                included.append(item)
                running += item.tokens
            else:
                excluded.append(item)
                logger.debug(
                    f"Budget: skipped {item.path} ({item.tokens} tokens, "
                    f"{self.max_tokens - running} remaining)"
                )

        if excluded:
            logger.info(
                f"Token budget {self.max_tokens}: included {len(included)} files "
                f"({running} tokens), excluded {len(excluded)}"
            )

        return BudgetResult(
            max_tokens=self.max_tokens,
            included=tuple(included),
            excluded=tuple(excluded),
            token_count=running,
            total_tokens=total,
        )
