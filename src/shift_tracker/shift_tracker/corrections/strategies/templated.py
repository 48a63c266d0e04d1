from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.constants import DEFAULT_TEMPLATED_REASON_MIN_LENGTH, REASON_MARKER
from .base import ReasonPolicy

_TEMPLATE_PREFIXES = ("Manager Name:", "Date/Time:", "Manager:")


@dataclass(frozen=True)
class TemplatedReasonPolicy(ReasonPolicy):
    """Reason prefilled with manager and timestamp; only the text after the
    marker is measured (dual correction dialog)."""

    min_length: int = DEFAULT_TEMPLATED_REASON_MIN_LENGTH
    marker: str = REASON_MARKER

    def template(self, *, manager: str, now: datetime) -> str:
        return f"Manager Name: {manager}\nDate/Time: {now:%Y-%m-%d %H:%M}\n{self.marker} "

    def extract(self, reason: str) -> str:
        text = (reason or "").strip()
        idx = text.find(self.marker)
        if idx >= 0:
            return text[idx + len(self.marker):].strip()

        # No marker left: keep whatever is not a template line.
        stripped = (line.strip() for line in text.split("\n"))
        lines = [line for line in stripped if line and not line.startswith(_TEMPLATE_PREFIXES)]
        return " ".join(lines)

    def check(self, reason: str) -> Optional[str]:
        if not (reason or "").strip():
            return "Correction reason is required for audit trail."
        if len(self.extract(reason)) < self.min_length:
            return (
                f"Please provide a reason for the time correction after '{self.marker}' "
                f"(minimum {self.min_length} characters)."
            )
        return None
