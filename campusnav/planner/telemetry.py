"""Per-strategy telemetry for route queries."""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StrategyTelemetry:
    """
    One strategy run within a route query.

    Attributes:
        start: Canonical start location name
        end: Canonical end location name
        algorithm: Strategy label
        routes_found: Number of routes the strategy contributed
        elapsed_ms: Wall-clock time spent in the strategy
        error: Exception summary if the strategy raised
    """
    start: str
    end: str
    algorithm: str
    routes_found: int
    elapsed_ms: float
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string for logging."""
        return json.dumps(self.to_dict(), ensure_ascii=False)
