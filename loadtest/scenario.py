from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class LoadScenario:
    """One load-test run against the generation endpoint"""

    name: str
    requests: int = 100
    length: int = 12
    options: Dict = field(default_factory=dict)
    delay: float = 0.0  # Delay between requests in seconds
    clear_before: bool = True  # Start from an empty history
    max_time: Optional[float] = None  # None means no time limit, value in seconds

    def __post_init__(self):
        """Fill in the server's default character classes if none were given"""
        if not self.options:
            self.options = {
                "upper": True,
                "lower": True,
                "numbers": True,
                "symbols": False,
            }
        if self.requests < 1:
            raise ValueError(f"requests must be at least 1, got {self.requests}")


DEFAULT_SCENARIOS = [
    LoadScenario("digits_short", length=4, options={"numbers": True}),
    LoadScenario("alnum_default"),
    LoadScenario(
        "all_classes_long",
        length=32,
        options={"upper": True, "lower": True, "numbers": True, "symbols": True},
    ),
]
