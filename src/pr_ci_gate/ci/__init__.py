"""CI backends and their registry."""

from pr_ci_gate.ci.base import ContinuousIntegration
from pr_ci_gate.ci.registry import CI_BACKENDS, load_cis, resolve_ci

__all__ = [
    "CI_BACKENDS",
    "ContinuousIntegration",
    "load_cis",
    "resolve_ci",
]
