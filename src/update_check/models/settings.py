import logging

import dotenv
from pydantic import ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from update_check.models.update_base import TargetPlatform

logger = logging.getLogger(__name__)

ENV_PREFIX = "rdts_updater_"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "update-check"


class EnvSettings(BaseSettings):
    """Read from RDTS_UPDATER_* environment variables and a .env file.

    Create an instance per use rather than at import time. Invalid values are
    logged and replaced by the field default, never raised.
    """

    model_config = SettingsConfigDict(
        env_file=dotenv.find_dotenv(usecwd=True),
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    # Replaces the caller's version when comparing, "major.minor.patch.build"
    assume_version: str | None = None

    # Overrides the detected platform, as a version file string ("Windows", "Ubuntu", ...)
    platform: TargetPlatform | None = None

    # http
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    # debug
    verbose: bool = False

    @field_validator("*", mode="wrap")
    @classmethod
    def default_if_invalid(cls, value, handler, info: ValidationInfo):
        try:
            return handler(value)
        except ValidationError:
            default = cls.model_fields[info.field_name].default
            logger.warning(
                "Ignoring invalid %s%s value %r, using %r",
                ENV_PREFIX.upper(),
                info.field_name.upper(),
                value,
                default,
            )
            return default
