"""Rule-based fraud risk scoring."""

from .scorer import RiskScorer

__all__ = ["RiskScorer"]
