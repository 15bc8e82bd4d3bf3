"""Practice tooling: baseline bots and a headless hand simulator."""

from .bots import baseline_strategy
from .simulator import SessionSummary, run_session

__all__ = ["baseline_strategy", "SessionSummary", "run_session"]
