"""Cent rounding for the stages of a GST calculation, read from rules/rounding.yaml.

Every stage quantizes to two decimal places. Only the rounding mode can be
configured, globally or per stage, and the ``component`` stage is pinned to
HALF_UP so both halves of an odd-cent tax round the same way.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, ROUND_HALF_UP
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import InvalidInput
from .money import CENT

STAGES = ("taxable", "tax", "component", "document")

_MODES = {
    "HALF_UP": ROUND_HALF_UP,
    "HALF_EVEN": ROUND_HALF_EVEN,
}
_PINNED = {"component": "HALF_UP"}

_CONFIG_PATH = Path(__file__).with_name("rules") / "rounding.yaml"


class RoundingConfigError(RuntimeError):
    """Raised when the rounding configuration is invalid or missing data."""


@dataclass(frozen=True)
class RoundingRule:
    stage: str
    mode: str

    def apply(self, amount: Decimal) -> Decimal:
        try:
            return amount.quantize(CENT, rounding=_MODES[self.mode])
        except InvalidOperation as exc:
            raise InvalidInput(f"{amount} is too large to round to cents at the {self.stage} stage") from exc


def _stage_rule(stage: str, raw: Any, default_mode: str) -> RoundingRule:
    if raw is None:
        raise RoundingConfigError(f"No rounding rule for stage '{stage}'")
    if not isinstance(raw, dict):
        raise RoundingConfigError(f"Rounding rule for stage '{stage}' must be a mapping")
    unknown = set(raw) - {"mode"}
    if unknown:
        raise RoundingConfigError(f"Unsupported keys {sorted(unknown)} for stage '{stage}'")
    mode = str(raw.get("mode") or default_mode).upper()
    if mode not in _MODES:
        raise RoundingConfigError(f"Unsupported rounding mode '{mode}' for stage '{stage}'")
    pinned = _PINNED.get(stage)
    if pinned and mode != pinned:
        raise RoundingConfigError(f"Stage '{stage}' must round {pinned}, not {mode}")
    return RoundingRule(stage=stage, mode=mode)


def _parse_rules(data: Mapping[str, Any]) -> Dict[str, RoundingRule]:
    default_mode = str(data.get("mode") or "HALF_UP").upper()
    stages = data.get("stages")
    if not isinstance(stages, dict):
        raise RoundingConfigError("rounding.yaml must include a 'stages' mapping")
    extra = set(stages) - set(STAGES)
    if extra:
        raise RoundingConfigError(f"Unknown rounding stages {sorted(extra)}")
    return {stage: _stage_rule(stage, stages.get(stage), default_mode) for stage in STAGES}


@lru_cache(maxsize=1)
def _load_rules() -> Dict[str, RoundingRule]:
    if not _CONFIG_PATH.exists():
        raise RoundingConfigError(f"rounding.yaml not found at {_CONFIG_PATH}")
    with _CONFIG_PATH.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise RoundingConfigError("rounding.yaml must define a mapping")
    return _parse_rules(data)


def rounding_rule(stage: str) -> RoundingRule:
    rule = _load_rules().get(stage)
    if rule is None:
        raise RoundingConfigError(f"No rounding rule for stage '{stage}'")
    return rule


def round_currency(amount: Decimal, stage: str) -> Decimal:
    """Round ``amount`` to cents with the rule configured for ``stage``.

    Raises :class:`InvalidInput` when the result has more digits than the
    decimal context holds (amounts from roughly 1e26 upward).
    """
    return rounding_rule(stage).apply(amount)
