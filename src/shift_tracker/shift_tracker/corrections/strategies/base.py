from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class ReasonPolicy(ABC):
    """Strategy Pattern: how a correction reason is prefilled and checked."""

    @abstractmethod
    def template(self, *, manager: str, now: datetime) -> str:
        """Initial content of the reason field."""

        raise NotImplementedError

    @abstractmethod
    def check(self, reason: str) -> Optional[str]:
        """Return a failure message, or None when the reason is acceptable."""

        raise NotImplementedError
