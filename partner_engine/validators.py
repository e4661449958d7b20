"""
Payload Validation for the Channel Partner Revenue Engine

Checks the structure of API payloads before a snapshot is built.
Numeric fields are never rejected here (they are coerced); only shapes the
engine cannot interpret raise ValueError with a clear message.
"""

from .models import MAX_TIERS, InputMode

VALID_MODES = [mode.value for mode in InputMode]


class PayloadValidator:
    """Validates the structure of a calculator payload."""

    def validate(self, data) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Payload must be a JSON object, got: {type(data).__name__}")

        self._validate_tiers(data.get("tiers"))
        self._validate_mode(data.get("mode"))

    def _validate_tiers(self, tiers) -> None:
        """Tiers are optional; when present they must be 1-5 objects."""
        if tiers is None:
            return

        if not isinstance(tiers, list):
            raise ValueError(f"tiers must be a list, got: {type(tiers).__name__}")

        if not 1 <= len(tiers) <= MAX_TIERS:
            raise ValueError(f"tiers must contain between 1 and {MAX_TIERS} entries, got: {len(tiers)}")

        for i, tier in enumerate(tiers):
            if not isinstance(tier, dict):
                raise ValueError(f"Tier {i} must be an object, got: {type(tier).__name__}")

    def _validate_mode(self, mode) -> None:
        if mode is None:
            return

        if mode not in VALID_MODES:
            raise ValueError(f"Invalid mode: {mode}. Must be one of {VALID_MODES}")
