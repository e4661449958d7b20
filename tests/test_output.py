"""
Unit Tests for Output Builder

Tests verify currency and percentage rendering and the response layout.
"""

from decimal import Decimal

import pytest

from partner_engine import CalculatorInputs, compute_metrics
from partner_engine.models import InputMode, OpportunityInputs, Ratio, Tier
from partner_engine.output import (
    PLACEHOLDER,
    OutputBuilder,
    format_count,
    format_currency,
    format_percent,
    to_money,
    to_ratio,
)


class TestFormatCurrency:
    """Whole-dollar USD rendering."""

    def test_thousands_separator(self):
        assert format_currency(Decimal("12500")) == "$12,500"

    def test_negative(self):
        assert format_currency(Decimal("-9950")) == "-$9,950"

    def test_rounds_half_up_to_whole_dollars(self):
        assert format_currency(Decimal("0.5")) == "$1"
        assert format_currency(Decimal("1234567.49")) == "$1,234,567"

    def test_zero(self):
        assert format_currency(Decimal("0")) == "$0"

    def test_beyond_default_precision(self):
        assert format_currency(Decimal("5E+28")) == f"${5 * 10**28:,}"
        assert format_currency(Decimal("-1E+30")) == f"-${10**30:,}"

    def test_negative_rounding_to_zero_has_no_sign(self):
        assert format_currency(Decimal("-0.4")) == "$0"


class TestFormatPercent:
    """One-decimal percentage rendering."""

    def test_one_decimal(self):
        assert format_percent(Decimal("129.6")) == "129.6%"

    def test_rounds_to_one_decimal(self):
        assert format_percent(Decimal("63.3431")) == "63.3%"
        assert format_percent(Decimal("36.65")) == "36.7%"

    def test_whole_number_gets_decimal(self):
        assert format_percent(Decimal("5")) == "5.0%"

    def test_defined_ratio(self):
        assert format_percent(Ratio(Decimal("172.8"))) == "172.8%"

    def test_undefined_ratio_renders_placeholder(self):
        assert format_percent(Ratio.undefined()) == PLACEHOLDER

    def test_none_renders_placeholder(self):
        assert format_percent(None) == PLACEHOLDER

    def test_to_ratio_undefined_is_null(self):
        assert to_ratio(Ratio.undefined()) is None

    def test_percent_beyond_default_precision(self):
        assert format_percent(Decimal("3.6E+29")) == f"{36 * 10**28}.0%"

    def test_to_ratio_beyond_default_precision(self):
        assert to_ratio(Ratio(Decimal("3.6E+29"))) == 3.6e29

    def test_to_money_beyond_default_precision(self):
        assert to_money(Decimal("5E+28")) == 5e28
        assert to_money(Decimal("1234.565")) == 1234.57


class TestFormatCount:
    def test_count(self):
        assert format_count(Decimal("19800")) == "19,800"

    def test_count_beyond_default_precision(self):
        assert format_count(Decimal("1E+30")) == f"{10**30:,}"


class TestOutputBuilder:
    """Test the response built for the default snapshot."""

    @pytest.fixture
    def response(self):
        inputs = CalculatorInputs()
        return OutputBuilder().build(inputs, compute_metrics(inputs))

    def test_sections(self, response):
        for key in ("inputs", "summary", "book", "opportunity", "scenarios", "talking_points", "disclaimer"):
            assert key in response

    def test_summary_cards(self, response):
        summary = response["summary"]
        assert summary["current_book_commission"]["display"] == "$12,500"
        assert summary["converted_wse"]["display"] == "90"
        assert summary["converted_wse"]["description"] == "of 360 total WSE"
        assert summary["gross_mgmt_fee"]["display"] == "$108,000"

    def test_book_breakdown(self, response):
        tier = response["book"]["tiers"][0]
        assert tier["label"] == "Tier 1"
        assert tier["commission"] == 12500.0
        assert tier["description"] == "$250,000 × 5.0% = $12,500"

    def test_opportunity_descriptions(self, response):
        opp = response["opportunity"]
        assert opp["mode"] == "by_clients"
        assert opp["total_wse"]["description"] == "clients (20) × avg WSE per client (18) = 360"
        assert opp["total_payroll"]["display"] == "$19,800,000"
        assert opp["gross_mgmt_fee"]["description"] == "Gross fee on converted WSE: 90 × $1,200 = $108,000"

    def test_standard_display(self, response):
        display = response["scenarios"]["standard"]["display"]
        assert display["mgmt_share"] == "63.3% of total"
        assert display["book_share"] == "36.7% of total"
        assert display["total"] == "$34,100"
        assert display["uplift_pct"] == "172.8%"
        assert display["uplift_abs"] == "$21,600 added"

    def test_custom_display(self, response):
        custom = response["scenarios"]["custom"]
        assert custom["uplift_pct"] == 129.6
        assert custom["display"]["total"] == "$28,700"
        assert custom["display"]["uplift_pct"] == "129.6%"
        assert custom["display"]["uplift_abs"] == "$16,200 added"
        assert custom["display"]["book_share"].startswith("$12,500 base • ")
        assert custom["display"]["per_client_added"] == "$810"

    def test_talking_points(self, response):
        point = response["talking_points"][1]
        assert point.startswith("At 25% conversion")
        assert "$16,200 at 15% commission" in point
        assert "$28,700" in point
        assert "$12,500." in point

    def test_zero_book_renders_placeholders(self):
        inputs = CalculatorInputs(tiers=(Tier(label="Tier 1", amount=Decimal("0"), pct=Decimal("5")),))
        custom = OutputBuilder().build(inputs, compute_metrics(inputs))["scenarios"]["custom"]
        assert custom["uplift_pct"] is None
        assert custom["display"]["uplift_pct"] == PLACEHOLDER
        assert custom["display"]["uplift_abs"] == ""

    def test_zero_total_renders_share_placeholders(self):
        inputs = CalculatorInputs(
            tiers=(Tier(label="Tier 1", amount=Decimal("0"), pct=Decimal("5")),),
            opportunity=OpportunityInputs(conversion_rate=Decimal("0")),
        )
        custom = OutputBuilder().build(inputs, compute_metrics(inputs))["scenarios"]["custom"]
        assert custom["mgmt_share_pct"] is None
        assert custom["book_share_pct"] is None
        assert custom["display"]["mgmt_share"] == PLACEHOLDER
        assert custom["display"]["book_share"] == f"$0 base • {PLACEHOLDER}"

    def test_response_is_json_serializable(self, response):
        import json

        assert json.loads(json.dumps(response))["scenarios"]["standard"]["total"] == 34100.0

    def test_very_large_snapshot_is_fully_formatted(self):
        inputs = CalculatorInputs(
            tiers=(Tier(label="Tier 1", amount=Decimal("1e30"), pct=Decimal("5")),),
            opportunity=OpportunityInputs(mode=InputMode.BY_WSE, total_wse_direct=Decimal("1e30")),
        )
        response = OutputBuilder().build(inputs, compute_metrics(inputs))

        assert response["summary"]["current_book_commission"]["display"] == f"${5 * 10**28:,}"
        assert response["summary"]["converted_wse"]["value"] == 25 * 10**28
        assert response["summary"]["gross_mgmt_fee"]["display"] == f"${3 * 10**32:,}"
        assert response["opportunity"]["total_wse"]["description"] == f"Total WSE entered directly: {10**30:,}"
        custom = response["scenarios"]["custom"]
        assert custom["uplift_pct"] is not None
        assert custom["display"]["uplift_pct"].endswith("%")
