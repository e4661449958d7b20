"""
Output Builder

Constructs the API response from an input snapshot and its derived metrics.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .models import CalculatorInputs, CustomScenario, DerivedMetrics, InputMode, Ratio, StaticScenario

PLACEHOLDER = "—"

DISCLAIMER = (
    "This calculator is for illustration and prospecting only. It is not a quote or guarantee. "
    "All figures are annual and pre-tax."
)


def round_half_up(value, exponent: str) -> Decimal:
    """Quantize with ROUND_HALF_UP, raising the context precision to fit any magnitude."""
    value = Decimal(value)
    exp = Decimal(exponent)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exp.as_tuple().exponent + 2)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(round_half_up(value, "0.01"))


def to_ratio(ratio: Ratio) -> float | None:
    """Numeric form of a Ratio for JSON; undefined becomes null."""
    if not ratio.is_defined:
        return None
    return float(round_half_up(ratio.value, "0.0001"))


def format_currency(value: Decimal) -> str:
    """Whole US dollars: 12500 -> "$12,500", -9950 -> "-$9,950"."""
    rounded = round_half_up(value, "1")
    if rounded < 0:
        return f"-${rounded.copy_abs():,.0f}"
    return f"${rounded.copy_abs():,.0f}"


def format_percent(value) -> str:
    """One decimal place with a % suffix. Undefined ratios render as the placeholder."""
    if isinstance(value, Ratio):
        if not value.is_defined:
            return PLACEHOLDER
        value = value.value
    if value is None:
        return PLACEHOLDER
    return f"{round_half_up(value, '0.1'):f}%"


def format_count(value) -> str:
    """Whole count with thousands separators: 1234 -> "1,234"."""
    return f"{round_half_up(value, '1'):,.0f}"


def _of_total(ratio: Ratio) -> str:
    return PLACEHOLDER if not ratio.is_defined else f"{format_percent(ratio)} of total"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, inputs: CalculatorInputs, metrics: DerivedMetrics) -> dict:
        """Construct the complete response from a snapshot and its metrics."""
        return {
            "inputs": inputs.to_dict(),
            "summary": self._build_summary(metrics),
            "book": self._build_book(metrics),
            "opportunity": self._build_opportunity(inputs, metrics),
            "scenarios": {
                "standard": self._build_standard(metrics.standard),
                "custom": self._build_custom(metrics.custom),
            },
            "talking_points": self._build_talking_points(inputs, metrics),
            "disclaimer": DISCLAIMER,
        }

    def _build_summary(self, metrics: DerivedMetrics) -> dict:
        """Headline cards."""
        return {
            "current_book_commission": {
                "value": to_money(metrics.total_book_commission),
                "display": format_currency(metrics.total_book_commission),
            },
            "converted_wse": {
                "value": metrics.converted_wse,
                "display": format_count(metrics.converted_wse),
                "description": f"of {format_count(metrics.total_wse)} total WSE",
            },
            "gross_mgmt_fee": {
                "value": to_money(metrics.gross_mgmt_fee),
                "display": format_currency(metrics.gross_mgmt_fee),
            },
        }

    def _build_book(self, metrics: DerivedMetrics) -> dict:
        """Per-tier breakdown of the current book."""
        return {
            "tiers": [
                {
                    "label": tier.label,
                    "amount": to_money(tier.amount),
                    "pct": float(tier.pct),
                    "commission": to_money(tier.commission),
                    "description": (
                        f"{format_currency(tier.amount)} × {format_percent(tier.pct)} = "
                        f"{format_currency(tier.commission)}"
                    ),
                }
                for tier in metrics.book.tiers
            ],
            "total_book_commission": to_money(metrics.total_book_commission),
            "display": format_currency(metrics.total_book_commission),
        }

    def _build_opportunity(self, inputs: CalculatorInputs, metrics: DerivedMetrics) -> dict:
        """Opportunity section with value and dynamic description for each field."""
        opp = inputs.opportunity

        if metrics.sizing.mode == InputMode.BY_CLIENTS:
            wse_desc = (
                f"clients ({format_count(opp.clients)}) × avg WSE per client "
                f"({format_count(opp.avg_wse_per_client)}) = {format_count(metrics.total_wse)}"
            )
        else:
            wse_desc = f"Total WSE entered directly: {format_count(metrics.total_wse)}"

        return {
            "mode": metrics.sizing.mode.value,
            "total_wse": {
                "value": float(metrics.total_wse),
                "description": wse_desc,
            },
            "converted_wse": {
                "value": metrics.converted_wse,
                "description": (
                    f"round({format_count(metrics.total_wse)} × {format_percent(opp.conversion_rate)}) = "
                    f"{format_count(metrics.converted_wse)}"
                ),
            },
            "total_payroll": {
                "value": to_money(metrics.total_payroll),
                "display": format_currency(metrics.total_payroll),
                "description": (
                    f"Total payroll on all {format_count(metrics.total_wse)} WSE at "
                    f"{format_currency(opp.avg_annual_wage)} average annual wage"
                ),
            },
            "gross_mgmt_fee": {
                "value": to_money(metrics.gross_mgmt_fee),
                "display": format_currency(metrics.gross_mgmt_fee),
                "description": (
                    f"Gross fee on converted WSE: {format_count(metrics.converted_wse)} × "
                    f"{format_currency(opp.mgmt_fee_per_wse)} = {format_currency(metrics.gross_mgmt_fee)}"
                ),
            },
        }

    def _build_standard(self, scenario: StaticScenario) -> dict:
        return {
            "name": "Standard CP",
            "mgmt_fee_commission": to_money(scenario.mgmt_fee_commission),
            "book": to_money(scenario.book),
            "total": to_money(scenario.total),
            "uplift_abs": to_money(scenario.uplift_abs),
            "uplift_pct": to_ratio(scenario.uplift_pct),
            "mgmt_share_pct": to_ratio(scenario.mgmt_share_pct),
            "book_share_pct": to_ratio(scenario.book_share_pct),
            "display": {
                "mgmt_fee_commission": format_currency(scenario.mgmt_fee_commission),
                "mgmt_share": _of_total(scenario.mgmt_share_pct),
                "book": format_currency(scenario.book),
                "book_share": _of_total(scenario.book_share_pct),
                "total": format_currency(scenario.total),
                "uplift_pct": format_percent(scenario.uplift_pct),
                "uplift_abs": f"{format_currency(scenario.uplift_abs)} added",
            },
        }

    def _build_custom(self, scenario: CustomScenario) -> dict:
        # uplift is only shown alongside a defined percentage
        uplift_added = "" if not scenario.uplift_pct.is_defined else f"{format_currency(scenario.uplift_abs)} added"

        return {
            "name": "Custom",
            "commission_pct": float(scenario.commission_pct),
            "book_portion_pct": float(scenario.book_portion_pct),
            "mgmt_fee_commission": to_money(scenario.commission),
            "base_book": to_money(scenario.base_book),
            "adjusted_book": to_money(scenario.adjusted_book),
            "total": to_money(scenario.total),
            "uplift_abs": to_money(scenario.uplift_abs),
            "uplift_pct": to_ratio(scenario.uplift_pct),
            "mgmt_share_pct": to_ratio(scenario.mgmt_share_pct),
            "book_share_pct": to_ratio(scenario.book_share_pct),
            "per_client_added": to_money(scenario.per_client_added),
            "display": {
                "mgmt_fee_commission": format_currency(scenario.commission),
                "mgmt_share": _of_total(scenario.mgmt_share_pct),
                "adjusted_book": format_currency(scenario.adjusted_book),
                "book_share": (
                    f"{format_currency(scenario.base_book)} base • {_of_total(scenario.book_share_pct)}"
                ),
                "total": format_currency(scenario.total),
                "uplift_pct": format_percent(scenario.uplift_pct),
                "uplift_abs": uplift_added,
                "per_client_added": format_currency(scenario.per_client_added),
            },
        }

    def _build_talking_points(self, inputs: CalculatorInputs, metrics: DerivedMetrics) -> list:
        custom = metrics.custom
        conversion_pct = format_count(inputs.opportunity.conversion_rate)
        return [
            "The management fee creates a new revenue stream on top of your current book, "
            "with no need to replace existing commissions.",
            f"At {conversion_pct}% conversion, your adjustable custom scenario shows "
            f"{format_currency(custom.commission)} at {custom.commission_pct.normalize():f}% commission, "
            f"for a total of {format_currency(custom.total)} when combined with your selected book portion "
            f"{format_currency(custom.adjusted_book)}.",
            "Illustrative only. Actual results depend on client mix, eligibility, and final agreements.",
        ]
