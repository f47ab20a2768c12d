"""Structural and content-pattern rules for bullet lines."""

from betterbullets.rules.engine import RuleResult, apply_rules

__all__ = [
    "RuleResult",
    "apply_rules",
]
