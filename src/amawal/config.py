"""
Runtime configuration, read from the environment (and ``.env``) at startup.
"""

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .models import DEFAULT_REGION, Region

logger = logging.getLogger("amawal")

BUNDLED_DATA_DIR = Path(__file__).parent / "data"


class AmawalConfig(BaseModel):
    """Settings for the lexicon and its query surface."""

    data_dir: Path = Field(
        default=BUNDLED_DATA_DIR,
        description="Directory holding the corpus (one subdirectory per entity kind)"
    )
    default_region: Region = Field(
        default=DEFAULT_REGION,
        description="Region used when a query names none"
    )
    site_url: str = Field(
        default="https://amawal.app",
        description="Base URL for links in linked-data documents"
    )
    display_limit: int = Field(
        default=12,
        ge=1,
        le=500,
        description="Default number of search results returned to callers"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name"
    )


_ENV_FIELDS = {
    "AMAWAL_DATA_DIR": "data_dir",
    "AMAWAL_DEFAULT_REGION": "default_region",
    "AMAWAL_SITE_URL": "site_url",
    "AMAWAL_DISPLAY_LIMIT": "display_limit",
    "AMAWAL_LOG_LEVEL": "log_level",
}


def load_config() -> AmawalConfig:
    """Build the config from ``AMAWAL_*`` environment variables.

    A ``.env`` file in the working directory is read first when present.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    if not load_dotenv(find_dotenv(usecwd=True)):
        logger.debug("No .env file found, using process environment only")

    values = {
        field_name: os.environ[env_name]
        for env_name, field_name in _ENV_FIELDS.items()
        if os.environ.get(env_name)
    }
    return AmawalConfig.model_validate(values)
