"""
Snapshot Updates

One explicit setter per editable field. Every setter coerces its value and
returns a NEW CalculatorInputs snapshot; the snapshot passed in is untouched.
Structural violations (tier bounds, bad indexes, unknown fields) are no-ops
that hand back the original snapshot.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable, Dict

from .coercion import clamp, non_negative
from .models import (
    CUSTOM_COMMISSION_MAX,
    MAX_TIERS,
    PERCENT_MAX,
    PERCENT_MIN,
    CalculatorInputs,
    InputMode,
    Tier,
)

logger = logging.getLogger(__name__)

NEW_TIER_PCT = Decimal("5")


# =============================================================================
# TIERS
# =============================================================================


def add_tier(inputs: CalculatorInputs) -> CalculatorInputs:
    """Append "Tier N" with amount 0 and 5%. No-op at the five-tier limit."""
    if len(inputs.tiers) >= MAX_TIERS:
        logger.debug("add_tier ignored: already at %d tiers", MAX_TIERS)
        return inputs

    new_tier = Tier(label=f"Tier {len(inputs.tiers) + 1}", amount=Decimal("0"), pct=NEW_TIER_PCT)
    return replace(inputs, tiers=inputs.tiers + (new_tier,))


def remove_tier(inputs: CalculatorInputs, index: int) -> CalculatorInputs:
    """
    Remove the tier at index. Remaining labels keep their text.

    No-op when it would leave zero tiers or the index is out of range.
    """
    if len(inputs.tiers) <= 1:
        logger.debug("remove_tier ignored: the last tier cannot be removed")
        return inputs
    if not _valid_index(inputs, index):
        logger.debug("remove_tier ignored: index %r out of range", index)
        return inputs

    return replace(inputs, tiers=tuple(t for i, t in enumerate(inputs.tiers) if i != index))


def update_tier(inputs: CalculatorInputs, index: int, key: str, value) -> CalculatorInputs:
    """Update one field ("label", "amount" or "pct") of one tier."""
    if not _valid_index(inputs, index):
        logger.debug("update_tier ignored: index %r out of range", index)
        return inputs

    tier = inputs.tiers[index]
    if key == "label":
        updated = replace(tier, label="" if value is None else str(value))
    elif key == "amount":
        updated = replace(tier, amount=non_negative(value))
    elif key == "pct":
        updated = replace(tier, pct=clamp(value, PERCENT_MIN, PERCENT_MAX))
    else:
        logger.debug("update_tier ignored: unknown field %r", key)
        return inputs

    tiers = inputs.tiers[:index] + (updated,) + inputs.tiers[index + 1:]
    return replace(inputs, tiers=tiers)


def _valid_index(inputs: CalculatorInputs, index) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(inputs.tiers)


# =============================================================================
# OPPORTUNITY
# =============================================================================


def _set_opportunity(inputs: CalculatorInputs, **changes) -> CalculatorInputs:
    return replace(inputs, opportunity=replace(inputs.opportunity, **changes))


def set_mode(inputs: CalculatorInputs, mode) -> CalculatorInputs:
    """Switch the sizing mode. Both modes' inputs are preserved."""
    try:
        new_mode = InputMode(mode)
    except ValueError:
        logger.debug("set_mode ignored: unknown mode %r", mode)
        return inputs
    return _set_opportunity(inputs, mode=new_mode)


def set_clients(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, clients=non_negative(value))


def set_avg_wse_per_client(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, avg_wse_per_client=non_negative(value))


def set_total_wse_direct(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, total_wse_direct=non_negative(value))


def set_avg_annual_wage(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, avg_annual_wage=non_negative(value))


def set_mgmt_fee_per_wse(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, mgmt_fee_per_wse=non_negative(value))


def set_conversion_rate(inputs: CalculatorInputs, value) -> CalculatorInputs:
    return _set_opportunity(inputs, conversion_rate=clamp(value, PERCENT_MIN, PERCENT_MAX))


# =============================================================================
# CUSTOM SCENARIO CONTROLS
# =============================================================================


def set_custom_commission_pct(inputs: CalculatorInputs, value) -> CalculatorInputs:
    """Custom commission slider, bounded to 0-50%."""
    controls = replace(inputs.controls, custom_commission_pct=clamp(value, PERCENT_MIN, CUSTOM_COMMISSION_MAX))
    return replace(inputs, controls=controls)


def set_book_portion_pct(inputs: CalculatorInputs, value) -> CalculatorInputs:
    controls = replace(inputs.controls, book_portion_pct=clamp(value, PERCENT_MIN, PERCENT_MAX))
    return replace(inputs, controls=controls)


def reset() -> CalculatorInputs:
    """Restore every input to the documented defaults, whatever the prior state."""
    return CalculatorInputs()


# =============================================================================
# OPERATION DISPATCH
# =============================================================================

VALUE_SETTERS: Dict[str, Callable[[CalculatorInputs, Any], CalculatorInputs]] = {
    "set_mode": set_mode,
    "set_clients": set_clients,
    "set_avg_wse_per_client": set_avg_wse_per_client,
    "set_total_wse_direct": set_total_wse_direct,
    "set_avg_annual_wage": set_avg_annual_wage,
    "set_mgmt_fee_per_wse": set_mgmt_fee_per_wse,
    "set_conversion_rate": set_conversion_rate,
    "set_custom_commission_pct": set_custom_commission_pct,
    "set_book_portion_pct": set_book_portion_pct,
}

OPERATIONS = sorted([*VALUE_SETTERS, "add_tier", "remove_tier", "update_tier", "reset"])


def apply_operation(inputs: CalculatorInputs, operation: Dict[str, Any]) -> CalculatorInputs:
    """
    Apply one named operation from an API payload.

    Examples:
        {"op": "set_clients", "value": 25}
        {"op": "add_tier"}
        {"op": "remove_tier", "index": 1}
        {"op": "update_tier", "index": 0, "field": "amount", "value": 300000}

    Raises ValueError for an unknown operation name.
    """
    if not isinstance(operation, dict):
        raise ValueError(f"Operation must be an object, got: {type(operation).__name__}")

    name = operation.get("op")

    if name in VALUE_SETTERS:
        return VALUE_SETTERS[name](inputs, operation.get("value"))
    if name == "add_tier":
        return add_tier(inputs)
    if name == "remove_tier":
        return remove_tier(inputs, operation.get("index"))
    if name == "update_tier":
        return update_tier(inputs, operation.get("index"), operation.get("field"), operation.get("value"))
    if name == "reset":
        return reset()

    raise ValueError(f"Unknown operation: {name}. Must be one of {OPERATIONS}")
