"""HTTP webhook receiver."""

from pr_ci_gate.server.app import create_app

__all__ = ["create_app"]
