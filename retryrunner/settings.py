"""
Retry settings from YAML + environment.

Precedence (low -> high):
1. RetrySettings defaults
2. YAML file (`retry:` section, or the whole mapping if there is none)
3. RETRY_RUNNER_* environment variables (optionally preloaded from a dotenv file)

YAML example:

    retry:
      max_retries_after_failure: 5
      delay_s: 0.5
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from retryrunner.config import DEFAULT_MAX_RETRIES_AFTER_FAILURE, RetryConfig, RetryOn
from retryrunner.continuation import ContinuationPredicate
from retryrunner.errors import SETTINGS_INVALID, SETTINGS_NOT_MAPPING, SETTINGS_UNREADABLE, RetrySettingsError
from retryrunner.hooks import BetweenAttemptsHook

logger = logging.getLogger(__name__)

ENV_PREFIX = "RETRY_RUNNER_"
CONFIG_PATH_ENV = "RETRY_RUNNER_CONFIG"


class RetrySettings(BaseModel):
    """Serializable part of RetryConfig; callables are attached in to_config()."""

    max_retries_after_failure: int = Field(DEFAULT_MAX_RETRIES_AFTER_FAILURE, ge=0)
    delay_s: float = Field(0.0, ge=0)

    def to_config(
        self,
        *,
        continuation: Optional[ContinuationPredicate] = None,
        between_attempts: Optional[BetweenAttemptsHook] = None,
        retry_on: RetryOn = (Exception,),
    ) -> RetryConfig:
        return RetryConfig(
            max_retries_after_failure=self.max_retries_after_failure,
            continuation=continuation,
            between_attempts=between_attempts,
            delay_s=self.delay_s,
            retry_on=retry_on,
        )


def _read_yaml_section(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(
            "retry settings file not found, using defaults",
            extra={"extra_data": {"config_path": str(path)}},
        )
        return {}
    except (OSError, UnicodeError, yaml.YAMLError) as e:
        raise RetrySettingsError(code=SETTINGS_UNREADABLE, message=f"{path}: {e}") from e

    if not isinstance(data, dict):
        raise RetrySettingsError(code=SETTINGS_NOT_MAPPING, message=f"{path}: root must be a mapping")

    section = data.get("retry", data)
    if not isinstance(section, dict):
        raise RetrySettingsError(code=SETTINGS_NOT_MAPPING, message=f"{path}: 'retry' must be a mapping")
    return dict(section)


def _env_overrides() -> Dict[str, str]:
    out: Dict[str, str] = {}
    for name in RetrySettings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip() != "":
            out[name] = raw.strip()
    return out


def load_settings(
    path: Optional[Union[str, Path]] = None,
    *,
    env_file: Optional[Union[str, Path]] = None,
) -> RetrySettings:
    if env_file is not None:
        load_dotenv(env_file, override=False)

    if path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        path = env_path if env_path else None

    raw: Dict[str, Any] = _read_yaml_section(Path(path)) if path is not None else {}
    raw.update(_env_overrides())

    try:
        settings = RetrySettings(**raw)
    except ValidationError as e:
        raise RetrySettingsError(code=SETTINGS_INVALID, message=str(e)) from e

    logger.debug(
        "retry settings loaded",
        extra={"extra_data": {"config_path": str(path) if path is not None else None, **settings.model_dump()}},
    )
    return settings
