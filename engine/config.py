"""
config.py - Engine & Server Configuration
=========================================
Immutable settings read from `STEPWISE_*` environment variables.
Unparsable values fall back to the defaults with a warning; they never
stop the server from starting.

    STEPWISE_DEFAULT_SPEED_MS   initial playback interval   (400)
    STEPWISE_MIN_SPEED_MS       fastest allowed interval    (5)
    STEPWISE_HOST / _PORT       Flask bind address          (127.0.0.1:5000)
    STEPWISE_DEBUG              Flask debug mode            (false)
    STEPWISE_LOG_LEVEL          root log level              (INFO)
    STEPWISE_SECRET_KEY         Flask session key           (random per process)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "STEPWISE_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineConfig:
    """Immutable engine / server configuration."""

    default_speed_ms: int           = 400
    min_speed_ms:     int           = 5
    host:             str           = "127.0.0.1"
    port:             int           = 5000
    debug:            bool          = False
    log_level:        str           = "INFO"
    secret_key:       Optional[str] = None


def load_config(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an EngineConfig from the environment (os.environ by default)."""
    env = os.environ if environ is None else environ
    defaults = EngineConfig()

    min_speed = _get_int(env, "MIN_SPEED_MS", defaults.min_speed_ms, min_value=1)
    return EngineConfig(
        default_speed_ms=_get_int(env, "DEFAULT_SPEED_MS", defaults.default_speed_ms, min_value=min_speed),
        min_speed_ms=min_speed,
        host=_get_str(env, "HOST", defaults.host),
        port=_get_int(env, "PORT", defaults.port, min_value=1, max_value=65535),
        debug=_get_bool(env, "DEBUG", defaults.debug),
        log_level=_get_str(env, "LOG_LEVEL", defaults.log_level).upper(),
        secret_key=env.get(ENV_PREFIX + "SECRET_KEY") or None,
    )


def _get_int(
    env: Mapping[str, str],
    key: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    raw = env.get(ENV_PREFIX + key)
    value = default
    if raw is not None:
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring %s%s=%r (not an integer)", ENV_PREFIX, key, raw)
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(ENV_PREFIX + key)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    logger.warning("Ignoring %s%s=%r (not a boolean)", ENV_PREFIX, key, raw)
    return default


def _get_str(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(ENV_PREFIX + key)
    if not value:
        return default
    return value
