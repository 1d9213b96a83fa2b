"""
Configuration management for the product import engine.

This module handles:
- Database location and URL
- Environment-specific configuration (development vs. production)
- The product URL suffix used when generating URL rewrites
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import (
    DATABASE_FILENAME,
    DEFAULT_PRODUCT_URL_SUFFIX,
)

logger = logging.getLogger(__name__)


class Config:
    """
    Application configuration manager.

    Environment variables:
        PRODUCT_IMPORT_ENV: 'production' (default) or 'development'
        PRODUCT_IMPORT_DATABASE_URL: full SQLAlchemy URL, overrides the file database
        PRODUCT_IMPORT_URL_SUFFIX: suffix appended to product url keys
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
        """
        self.environment = environment

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = Path.home() / ".product_import"

        self._database_path = self._base_dir / DATABASE_FILENAME
        self._database_url_override = os.environ.get("PRODUCT_IMPORT_DATABASE_URL")
        self._product_url_suffix = os.environ.get(
            "PRODUCT_IMPORT_URL_SUFFIX", DEFAULT_PRODUCT_URL_SUFFIX
        )

    def _get_project_data_dir(self) -> Path:
        """Return the project's data/ directory used in development."""
        project_root = Path(__file__).parent.parent.parent.parent
        return project_root / "data"

    @property
    def database_path(self) -> Path:
        """Full path to the SQLite database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        Returns:
            PRODUCT_IMPORT_DATABASE_URL when set, otherwise a SQLite URL
            pointing at database_path.
        """
        if self._database_url_override:
            return self._database_url_override

        # SQLite needs the directory to exist before the first connect
        self._database_path.parent.mkdir(parents=True, exist_ok=True)
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def product_url_suffix(self) -> str:
        """Suffix appended to a product url key to form its request path."""
        return self._product_url_suffix

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    PRODUCT_IMPORT_ENV or defaults to production. Ignored if
                    the singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get("PRODUCT_IMPORT_ENV", "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None
