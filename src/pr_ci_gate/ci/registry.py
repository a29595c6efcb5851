"""Resolution and one-time initialization of configured CI backends."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pr_ci_gate.ci.backends import HttpHookCI, LoggingCI
from pr_ci_gate.ci.base import ContinuousIntegration
from pr_ci_gate.config import GateSettings
from pr_ci_gate.errors import CIInitError

logger = logging.getLogger(__name__)

CI_BACKENDS: dict[str, type[ContinuousIntegration]] = {
    cls.key: cls for cls in (LoggingCI, HttpHookCI)
}


def resolve_ci(key: str, settings: GateSettings) -> ContinuousIntegration | None:
    """Return a fresh, uninitialized backend for `key`, or None if the key is unknown."""
    ci_cls = CI_BACKENDS.get(key)
    if ci_cls is None:
        return None
    return ci_cls(settings)


def load_cis(keys: Iterable[str] | None, settings: GateSettings) -> list[ContinuousIntegration]:
    """Resolve and initialize every configured backend, preserving configuration order.

    Unknown keys are logged and skipped.

    Raises:
        CIInitError: If a backend fails to initialize. Nothing is returned in that
            case, so an uninitialized backend can never be triggered.
    """
    continuous_integrations: list[ContinuousIntegration] = []
    if not keys:
        return continuous_integrations

    for key in keys:
        ci = resolve_ci(key, settings)
        if ci is None:
            logger.warning(f'CI identified with "{key}" does not exist', extra={"key": key})
            continue
        try:
            ci.init()
        except CIInitError:
            raise
        except Exception as e:
            raise CIInitError(key, str(e)) from e
        continuous_integrations.append(ci)

    logger.info("CI backends loaded", extra={"ci": [c.key for c in continuous_integrations]})
    return continuous_integrations
