"""Environment-driven settings for rmd-wrap.

Command-line flags remain the primary configuration surface; the
values here only cover what the flags do not: which R front-end to run
and which label goes into ``-t`` tags.

Variables
---------
``RMD_WRAP_RSCRIPT``
    Name or path of the Rscript executable (default ``Rscript``).
``RMD_WRAP_TAG_LABEL``
    Label placed between ``_`` and the timestamp of a tag
    (default ``LP``).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rmd_wrap.utils.constants import DEFAULT_RSCRIPT, DEFAULT_TAG_LABEL

ENV_PREFIX: str = "RMD_WRAP_"


class Settings(BaseSettings):
    """Immutable runtime settings resolved once per invocation."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True)

    rscript: str = DEFAULT_RSCRIPT
    tag_label: str = DEFAULT_TAG_LABEL

    @field_validator("rscript", "tag_label", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return cls.model_fields[info.field_name].default
        return value
