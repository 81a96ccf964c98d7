"""Runtime configuration — env-driven via pydantic-settings.

Reads from a ``.env`` file and ``JOBVIEW_*`` environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class JobViewConfig(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export JOBVIEW_ENVIRONMENT=staging
        export JOBVIEW_LOG_LEVEL=DEBUG
        export JOBVIEW_CATALOG_PATH=/data/catalog.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="JOBVIEW_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Catalog
    catalog_path: Path = Path(".jobview/catalog.json")
    root_view_name: str = "all"
    root_url: str = "http://localhost:8080/"

    # Principal used by the CLI when --as is not given
    default_principal: str = "anonymous"

    # Feed window
    feed_recent_days: int = 7
    feed_min_builds: int = 10

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton; import as `from jobview.config import config`
config = JobViewConfig()
