from __future__ import annotations

import unicodedata
from typing import Mapping, Optional

from .base import PotentialInputs, PotentialSignal

# Earlier career stages get a higher prior.
SENIORITY_PRIORS: Mapping[str, float] = {
    "junior": 4.5,
    "pleno": 4.0,
    "mid": 4.0,
    "senior": 3.5,
    "especialista": 3.0,
    "specialist": 3.0,
    "principal": 2.5,
    "staff": 2.0,
}
UNKNOWN_SENIORITY_PRIOR = 3.0


def normalize_label(value: Optional[str]) -> str:
    """'Júnior ' -> 'junior'."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


class SenioritySignal(PotentialSignal):
    """Fixed prior by seniority; always present."""

    name = "seniority"

    def __init__(self, priors: Optional[Mapping[str, float]] = None, *, default: float = UNKNOWN_SENIORITY_PRIOR):
        table = priors if priors is not None else SENIORITY_PRIORS
        self._priors = {normalize_label(k): float(v) for k, v in table.items()}
        self._default = float(default)

    def evaluate(self, inputs: PotentialInputs) -> Optional[float]:
        return self._priors.get(normalize_label(inputs.seniority), self._default)
