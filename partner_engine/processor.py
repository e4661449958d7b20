"""
Metrics Processor - Main Orchestrator

Recomputes every derived metric from one input snapshot through discrete,
testable steps.
"""

from typing import Any, Dict

from .calculators import BookAggregator, ConversionEngine, OpportunitySizer, ScenarioComparator
from .models import CalculatorInputs, DerivedMetrics, ProcessingContext
from .output import OutputBuilder
from .validators import PayloadValidator


class MetricsProcessor:
    """
    Main orchestrator for the recompute pass.

    Implements a clear pipeline pattern:
    1. Build Context
    2. Aggregate Book
    3. Size Opportunity
    4. Convert WSE
    5. Compare Scenarios
    6. Freeze Metrics

    Every step runs on every pass; nothing is cached between snapshots.
    """

    def __init__(self):
        self.validator = PayloadValidator()
        self.book_aggregator = BookAggregator()
        self.opportunity_sizer = OpportunitySizer()
        self.conversion_engine = ConversionEngine()
        self.scenario_comparator = ScenarioComparator()
        self.output_builder = OutputBuilder()

    def process(self, inputs: CalculatorInputs) -> DerivedMetrics:
        """
        Compute all derived metrics for a snapshot.

        Args:
            inputs: The current CalculatorInputs snapshot

        Returns:
            DerivedMetrics populated from that snapshot only
        """
        # Step 1: Build context
        ctx = ProcessingContext(inputs=inputs)

        # Step 2: Total book commission across tiers
        ctx.book = self.book_aggregator.calculate(inputs.tiers)

        # Step 3: Total WSE for the active mode
        ctx.sizing = self.opportunity_sizer.calculate(inputs.opportunity)

        # Step 4: Converted WSE, payroll, gross management fee
        ctx.conversion = self.conversion_engine.calculate(inputs.opportunity, ctx.sizing)

        # Step 5: Scenarios
        ctx.standard = self.scenario_comparator.static_scenario()
        ctx.custom = self.scenario_comparator.custom_scenario(
            gross_mgmt_fee=ctx.conversion.gross_mgmt_fee,
            total_book_commission=ctx.book.total_book_commission,
            controls=inputs.controls,
            clients=inputs.opportunity.clients,
        )

        # Step 6: Freeze
        return DerivedMetrics(
            book=ctx.book,
            sizing=ctx.sizing,
            conversion=ctx.conversion,
            standard=ctx.standard,
            custom=ctx.custom,
        )

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Compute metrics from a raw dictionary payload.

        Convenience method for API usage.
        """
        self.validator.validate(data)
        inputs = CalculatorInputs.from_dict(data)
        return self.output_builder.build(inputs, self.process(inputs))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_processor = MetricsProcessor()


def compute_metrics(inputs: CalculatorInputs) -> DerivedMetrics:
    """Pure recompute: snapshot in, fully populated metrics out."""
    return _default_processor.process(inputs)


def process_from_json(json_input: str) -> str:
    """
    Process a JSON string payload and return a JSON string response.
    """
    import json

    try:
        data = json.loads(json_input)
        result = _default_processor.process_from_dict(data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)
