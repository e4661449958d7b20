"""
Conversion Engine

Scales total WSE by the conversion rate and derives payroll and the gross
management fee.
"""

from decimal import ROUND_HALF_UP, Decimal

from ..coercion import non_negative, number_from_input
from ..models import ConversionResult, OpportunityInputs, OpportunitySizing


def round_count(value: Decimal) -> int:
    """Round to the nearest whole WSE (ROUND_HALF_UP)."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


class ConversionEngine:
    """Calculates converted WSE, total payroll and gross management fee."""

    def calculate(self, opportunity: OpportunityInputs, sizing: OpportunitySizing) -> ConversionResult:
        total_wse = sizing.total_wse
        converted = self._calculate_converted(total_wse, opportunity.conversion_rate)

        return ConversionResult(
            converted_wse=converted,
            total_payroll=self._calculate_payroll(total_wse, opportunity.avg_annual_wage),
            gross_mgmt_fee=Decimal(converted) * non_negative(opportunity.mgmt_fee_per_wse),
        )

    def _calculate_converted(self, total_wse: Decimal, conversion_rate) -> int:
        """
        Converted WSE = round(total WSE × conversion rate / 100)

        The rate is only coerced here, never clamped; a negative product is
        floored so the count stays a non-negative integer.
        """
        rate = number_from_input(conversion_rate)
        return max(0, round_count(total_wse * (rate / Decimal("100"))))

    def _calculate_payroll(self, total_wse: Decimal, avg_annual_wage) -> Decimal:
        """Payroll covers every addressable WSE, not just the converted ones."""
        return total_wse * non_negative(avg_annual_wage)
