"""
Scenario Comparator

Builds the two revenue scenarios shown side by side against the current book:
a fixed Standard CP reference and an adjustable custom scenario.
"""

from decimal import Decimal

from ..coercion import number_from_input
from ..models import CustomScenario, CustomScenarioControls, Ratio, StaticScenario

HUNDRED = Decimal("100")


def commission_from_rate(gross_mgmt_fee: Decimal, rate_pct) -> Decimal:
    """Management-fee commission earned at a given commission rate (percent)."""
    return gross_mgmt_fee * (number_from_input(rate_pct) / HUNDRED)


class ScenarioComparator:
    """Produces the Standard CP and custom scenarios."""

    # Standard CP illustration, independent of every input
    STATIC_CP_MGMT = Decimal("21600")
    STATIC_CP_BOOK = Decimal("12500")

    def static_scenario(self) -> StaticScenario:
        """
        Standard CP reference card.

        Total = 21,600 + 12,500 = 34,100
        Uplift = 34,100 - 12,500 = 21,600 (172.8% of book)
        """
        mgmt = self.STATIC_CP_MGMT
        book = self.STATIC_CP_BOOK
        total = mgmt + book
        uplift = total - book

        return StaticScenario(
            mgmt_fee_commission=mgmt,
            book=book,
            total=total,
            uplift_abs=uplift,
            uplift_pct=Ratio.percent_of(uplift, book),
            mgmt_share_pct=Ratio.percent_of(mgmt, total),
            book_share_pct=Ratio.percent_of(book, total),
        )

    def custom_scenario(
        self,
        gross_mgmt_fee: Decimal,
        total_book_commission: Decimal,
        controls: CustomScenarioControls,
        clients,
    ) -> CustomScenario:
        """
        Custom scenario.

        Commission    = gross mgmt fee × custom commission % / 100
        Adjusted book = total book × book portion % / 100
        Total         = commission + adjusted book
        Uplift        = total - total book (the full book, not the adjusted one)

        Shares are undefined when total is zero; uplift % is undefined when the
        book is zero. Per-client added revenue degrades to zero without clients.
        """
        commission_pct = number_from_input(controls.custom_commission_pct)
        book_portion_pct = number_from_input(controls.book_portion_pct)

        commission = commission_from_rate(gross_mgmt_fee, commission_pct)
        adjusted_book = total_book_commission * (book_portion_pct / HUNDRED)
        total = commission + adjusted_book
        uplift = total - total_book_commission

        return CustomScenario(
            commission_pct=commission_pct,
            book_portion_pct=book_portion_pct,
            commission=commission,
            base_book=total_book_commission,
            adjusted_book=adjusted_book,
            total=total,
            mgmt_share_pct=Ratio.percent_of(commission, total),
            book_share_pct=Ratio.percent_of(adjusted_book, total),
            uplift_abs=uplift,
            uplift_pct=Ratio.percent_of(uplift, total_book_commission),
            per_client_added=self._per_client(commission, clients),
        )

    def _per_client(self, commission: Decimal, clients) -> Decimal:
        client_count = number_from_input(clients)
        if client_count == 0:
            return Decimal("0")
        return commission / client_count
