"""
Domain Models for the Channel Partner Revenue Engine

These dataclasses provide type-safe representations of the calculator inputs
and every derived metric. All monetary values use Decimal for precision.
Snapshots are frozen: an update produces a new snapshot instead of mutating one.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from .coercion import clamp, non_negative

MAX_TIERS = 5
PERCENT_MIN = Decimal("0")
PERCENT_MAX = Decimal("100")
CUSTOM_COMMISSION_MAX = Decimal("50")

# =============================================================================
# INPUT MODELS
# =============================================================================


def _amount(data: dict, key: str, default: Decimal) -> Decimal:
    """Coerce a present field to a non-negative number; absent fields keep the default."""
    if key not in data:
        return default
    return non_negative(data[key])


def _percent(data: dict, key: str, default: Decimal, upper: Decimal) -> Decimal:
    if key not in data:
        return default
    return clamp(data[key], PERCENT_MIN, upper)


class InputMode(str, Enum):
    """How the total WSE count is sized."""

    BY_CLIENTS = "by_clients"
    BY_WSE = "by_wse"


@dataclass(frozen=True)
class Tier:
    """A single tier of the partner's current commission book."""

    label: str
    amount: Decimal
    pct: Decimal  # percent, 0-100

    @classmethod
    def from_dict(cls, data: dict) -> "Tier":
        return cls(
            label=str(data.get("label", "")),
            amount=non_negative(data.get("amount")),
            pct=clamp(data.get("pct"), PERCENT_MIN, PERCENT_MAX),
        )

    def to_dict(self) -> dict:
        return {"label": self.label, "amount": float(self.amount), "pct": float(self.pct)}


@dataclass(frozen=True)
class OpportunityInputs:
    """Sizing and fee assumptions for the management-fee opportunity."""

    mode: InputMode = InputMode.BY_CLIENTS
    clients: Decimal = Decimal("20")
    avg_wse_per_client: Decimal = Decimal("18")
    total_wse_direct: Decimal = Decimal("360")
    avg_annual_wage: Decimal = Decimal("55000")
    mgmt_fee_per_wse: Decimal = Decimal("1200")
    conversion_rate: Decimal = Decimal("25")  # % of WSE that move onto the fee model

    @classmethod
    def from_dict(cls, data: dict) -> "OpportunityInputs":
        defaults = cls()
        return cls(
            mode=InputMode(data.get("mode", defaults.mode.value)),
            clients=_amount(data, "clients", defaults.clients),
            avg_wse_per_client=_amount(data, "avg_wse_per_client", defaults.avg_wse_per_client),
            total_wse_direct=_amount(data, "total_wse_direct", defaults.total_wse_direct),
            avg_annual_wage=_amount(data, "avg_annual_wage", defaults.avg_annual_wage),
            mgmt_fee_per_wse=_amount(data, "mgmt_fee_per_wse", defaults.mgmt_fee_per_wse),
            conversion_rate=_percent(data, "conversion_rate", defaults.conversion_rate, PERCENT_MAX),
        )


@dataclass(frozen=True)
class CustomScenarioControls:
    """Slider values behind the adjustable custom scenario."""

    custom_commission_pct: Decimal = Decimal("15")  # domain 0-50
    book_portion_pct: Decimal = Decimal("100")  # domain 0-100

    @classmethod
    def from_dict(cls, data: dict) -> "CustomScenarioControls":
        defaults = cls()
        return cls(
            custom_commission_pct=_percent(
                data, "custom_commission_pct", defaults.custom_commission_pct, CUSTOM_COMMISSION_MAX
            ),
            book_portion_pct=_percent(data, "book_portion_pct", defaults.book_portion_pct, PERCENT_MAX),
        )


def default_tiers() -> tuple[Tier, ...]:
    return (Tier(label="Tier 1", amount=Decimal("250000"), pct=Decimal("5")),)


@dataclass(frozen=True)
class CalculatorInputs:
    """Complete input snapshot for one recompute pass."""

    tiers: tuple[Tier, ...] = field(default_factory=default_tiers)
    opportunity: OpportunityInputs = field(default_factory=OpportunityInputs)
    controls: CustomScenarioControls = field(default_factory=CustomScenarioControls)

    @classmethod
    def from_dict(cls, data: dict) -> "CalculatorInputs":
        """Build a snapshot from a flat payload. Missing fields take the defaults."""
        raw_tiers = data.get("tiers")
        tiers = tuple(Tier.from_dict(t) for t in raw_tiers) if raw_tiers else default_tiers()
        return cls(
            tiers=tiers,
            opportunity=OpportunityInputs.from_dict(data),
            controls=CustomScenarioControls.from_dict(data),
        )

    def to_dict(self) -> dict:
        opp = self.opportunity
        return {
            "tiers": [t.to_dict() for t in self.tiers],
            "mode": opp.mode.value,
            "clients": float(opp.clients),
            "avg_wse_per_client": float(opp.avg_wse_per_client),
            "total_wse_direct": float(opp.total_wse_direct),
            "avg_annual_wage": float(opp.avg_annual_wage),
            "mgmt_fee_per_wse": float(opp.mgmt_fee_per_wse),
            "conversion_rate": float(opp.conversion_rate),
            "custom_commission_pct": float(self.controls.custom_commission_pct),
            "book_portion_pct": float(self.controls.book_portion_pct),
        }


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class Ratio:
    """
    A percentage that may be undefined.

    A zero or negative base yields an undefined Ratio instead of NaN so that the
    missing value can never leak into downstream arithmetic.
    """

    value: Decimal | None = None

    @property
    def is_defined(self) -> bool:
        return self.value is not None

    @classmethod
    def undefined(cls) -> "Ratio":
        return cls(None)

    @classmethod
    def percent_of(cls, numerator: Decimal, denominator: Decimal) -> "Ratio":
        if denominator <= 0:
            return cls.undefined()
        return cls((numerator / denominator) * Decimal("100"))


@dataclass(frozen=True)
class TierCommission:
    """Commission contributed by one book tier."""

    label: str
    amount: Decimal
    pct: Decimal
    commission: Decimal


@dataclass(frozen=True)
class BookSummary:
    """Results of the book aggregation step."""

    total_book_commission: Decimal = Decimal("0")
    tiers: tuple[TierCommission, ...] = ()


@dataclass(frozen=True)
class OpportunitySizing:
    """Results of the opportunity sizing step."""

    mode: InputMode = InputMode.BY_CLIENTS
    total_wse: Decimal = Decimal("0")


@dataclass(frozen=True)
class ConversionResult:
    """Results of the conversion step."""

    converted_wse: int = 0
    total_payroll: Decimal = Decimal("0")
    gross_mgmt_fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class StaticScenario:
    """Fixed reference scenario (Standard CP illustration)."""

    mgmt_fee_commission: Decimal
    book: Decimal
    total: Decimal
    uplift_abs: Decimal
    uplift_pct: Ratio
    mgmt_share_pct: Ratio
    book_share_pct: Ratio


@dataclass(frozen=True)
class CustomScenario:
    """Adjustable scenario driven by the custom commission and book portion."""

    commission_pct: Decimal
    book_portion_pct: Decimal
    commission: Decimal
    base_book: Decimal
    adjusted_book: Decimal
    total: Decimal
    mgmt_share_pct: Ratio
    book_share_pct: Ratio
    uplift_abs: Decimal
    uplift_pct: Ratio
    per_client_added: Decimal


@dataclass(frozen=True)
class DerivedMetrics:
    """Every value computed from one input snapshot."""

    book: BookSummary
    sizing: OpportunitySizing
    conversion: ConversionResult
    standard: StaticScenario
    custom: CustomScenario

    @property
    def total_book_commission(self) -> Decimal:
        return self.book.total_book_commission

    @property
    def total_wse(self) -> Decimal:
        return self.sizing.total_wse

    @property
    def converted_wse(self) -> int:
        return self.conversion.converted_wse

    @property
    def total_payroll(self) -> Decimal:
        return self.conversion.total_payroll

    @property
    def gross_mgmt_fee(self) -> Decimal:
        return self.conversion.gross_mgmt_fee


@dataclass
class ProcessingContext:
    """
    Holds the intermediate results of one recompute pass.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    inputs: CalculatorInputs

    # Step results (populated as we go)
    book: BookSummary = field(default_factory=BookSummary)
    sizing: OpportunitySizing = field(default_factory=OpportunitySizing)
    conversion: ConversionResult = field(default_factory=ConversionResult)
    standard: StaticScenario | None = None
    custom: CustomScenario | None = None
