"""Pull request CI gate.

Comment commands on pull requests decide who may run CI:
- a file-backed user/admin whitelist
- a closed catalog of comment commands matched by configured patterns
- pluggable CI backends notified when a build should start
"""

__version__ = "0.1.0"

from pr_ci_gate.config import FormatConfig, GateSettings
from pr_ci_gate.dispatcher import WhitelistDispatcher

__all__ = ["__version__", "FormatConfig", "GateSettings", "WhitelistDispatcher"]
