"""Production configuration guard — refuses unsafe startup in production.

Runs once before the CLI touches a catalog.  Raises
``ProductionConfigError`` listing every violated constraint at once.
"""

from __future__ import annotations

import logging

from jobview.config import JobViewConfig
from jobview.core.catalog import Catalog

logger = logging.getLogger(__name__)


class ProductionConfigError(RuntimeError):
    """Raised when production configuration constraints are violated.

    The process should exit; this error must not be caught and ignored.
    """


def enforce_production_constraints(config: JobViewConfig, catalog: Catalog) -> None:
    """Validate production-critical settings.

    Constraints enforced
    --------------------
    1. Debug mode must be disabled.
    2. The catalog must be secured (a ``MatrixACL``, not ``UnsecuredACL``).

    Does nothing outside production.
    """
    if not config.is_production:
        return

    violations: list[str] = []

    if config.debug:
        violations.append(
            "debug=True is not allowed in production. Set JOBVIEW_DEBUG=false."
        )

    if not catalog.secured:
        violations.append(
            "The catalog is unsecured; every principal could create items. "
            'Set "secured": true and add grants.'
        )

    if violations:
        msg = "Production configuration guard failed.\n" + "\n".join(
            f"  - {v}" for v in violations
        )
        logger.critical(msg)
        raise ProductionConfigError(msg)

    logger.info("Production configuration guard passed.")
