"""
Mock UI layer that logs indicator and status changes instead of drawing them.
"""
import logging
from typing import Dict, List, Tuple

from .types import INDICATOR_NAMES, IndicatorName

logger = logging.getLogger(__name__)


class MockUI:
    """Records UI affordance calls; used headless and in tests."""

    def __init__(self):
        """Initialize the mock UI."""
        self.indicators: Dict[str, bool] = {name: False for name in INDICATOR_NAMES}
        self.status_text = ""
        self.calls: List[Tuple[str, tuple]] = []

    def set_indicator_active(self, name: IndicatorName, active: bool) -> None:
        """Record an indicator change."""
        self.calls.append(("indicator", (name, active)))
        if self.indicators.get(name) != active:
            logger.debug(f"[MockUI] Indicator {name}: {'on' if active else 'off'}")
        self.indicators[name] = active

    def set_status_text(self, text: str) -> None:
        """Record a status change."""
        self.calls.append(("status", (text,)))
        logger.debug(f"[MockUI] Status: {text}")
        self.status_text = text

    @property
    def active_indicators(self) -> List[str]:
        return [name for name, active in self.indicators.items() if active]

    def reset_counters(self) -> None:
        """Forget recorded calls."""
        self.calls.clear()
