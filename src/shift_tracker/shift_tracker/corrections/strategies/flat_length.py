from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.constants import DEFAULT_SIMPLE_REASON_MIN_LENGTH
from .base import ReasonPolicy


@dataclass(frozen=True)
class FlatLengthReasonPolicy(ReasonPolicy):
    """Whole reason field must reach a minimum length (single-field dialog)."""

    min_length: int = DEFAULT_SIMPLE_REASON_MIN_LENGTH

    def template(self, *, manager: str, now: datetime) -> str:
        return ""

    def check(self, reason: str) -> Optional[str]:
        text = (reason or "").strip()
        if not text:
            return "Correction reason is required for audit trail."
        if len(text) < self.min_length:
            return f"Correction reason must be at least {self.min_length} characters."
        return None
