"""
Book Aggregator

Sums the partner's existing commission across the book tiers.
"""

from decimal import Decimal

from ..coercion import number_from_input
from ..models import BookSummary, Tier, TierCommission

HUNDRED = Decimal("100")


class BookAggregator:
    """Calculates total book commission from the tier list."""

    def calculate(self, tiers: tuple[Tier, ...]) -> BookSummary:
        """
        Total Book Commission = Σ tier.amount × tier.pct / 100

        Every component is coerced before multiplication, so a malformed
        amount or percentage contributes zero instead of failing the pass.
        """
        breakdown = tuple(self._tier_commission(tier) for tier in tiers)
        total = sum((t.commission for t in breakdown), Decimal("0"))

        return BookSummary(total_book_commission=total, tiers=breakdown)

    def _tier_commission(self, tier: Tier) -> TierCommission:
        amount = number_from_input(tier.amount)
        pct = number_from_input(tier.pct)
        return TierCommission(
            label=tier.label,
            amount=amount,
            pct=pct,
            commission=amount * (pct / HUNDRED),
        )
