"""
Configuration management for soap-do

This module provides global defaults for SoapClient instances.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import SoapConfig


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_env(key: str) -> str | None:
    """Get environment variable value."""
    return os.environ.get(key)


def _get_env_float(key: str) -> float | None:
    value = _get_env(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r", key, value)
        return None


def _get_env_flag(key: str) -> bool | None:
    value = _get_env(key)
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


DEFAULT_TIMEOUT = 30.0

_env_timeout = _get_env_float("SOAP_DO_TIMEOUT")

# Global configuration
_global_config: dict[str, object] = {
    "timeout": DEFAULT_TIMEOUT if _env_timeout is None else _env_timeout,
    "user_agent": _get_env("SOAP_DO_USER_AGENT"),
    "default_root_name": _get_env("SOAP_DO_DEFAULT_ROOT_NAME") or "Object",
    "pretty_print": _get_env_flag("SOAP_DO_PRETTY_PRINT") or False,
    "debug": _get_env_flag("SOAP_DO_DEBUG") or False,
}

if _global_config["debug"]:
    logging.getLogger("soap_do").setLevel(logging.DEBUG)


def configure(
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
    default_root_name: str | None = None,
    pretty_print: bool | None = None,
    debug: bool | None = None,
) -> None:
    """
    Configure soap-do defaults.

    Args:
        timeout: Request timeout in seconds for the default HTTP transport
        user_agent: User-Agent header sent by the default HTTP transport
        default_root_name: Element name used for anonymous values (default: Object)
        pretty_print: Indent request documents
        debug: Lower the ``soap_do`` logger to DEBUG

    Example::

        from soap_do import configure

        configure(timeout=10.0, debug=True)
    """
    global _global_config

    if timeout is not None:
        _global_config["timeout"] = timeout
    if user_agent is not None:
        _global_config["user_agent"] = user_agent
    if default_root_name is not None:
        _global_config["default_root_name"] = default_root_name
    if pretty_print is not None:
        _global_config["pretty_print"] = pretty_print
    if debug is not None:
        _global_config["debug"] = debug
        logging.getLogger("soap_do").setLevel(logging.DEBUG if debug else logging.NOTSET)


def get_config() -> "SoapConfig":
    """
    Get current soap-do configuration.

    Example::

        from soap_do import get_config

        config = get_config()
        print(f"Timeout: {config.timeout}")
    """
    from . import __version__
    from .types import SoapConfig

    return SoapConfig(
        timeout=float(_global_config["timeout"]),  # type: ignore[arg-type]
        user_agent=_global_config["user_agent"] or f"soap-do/{__version__}",  # type: ignore[arg-type]
        default_root_name=str(_global_config["default_root_name"] or "Object"),
        pretty_print=bool(_global_config["pretty_print"]),
        debug=bool(_global_config["debug"]),
    )


def configure_from_env() -> None:
    """
    Configure soap-do from environment variables.

    Reads from:
        - SOAP_DO_TIMEOUT
        - SOAP_DO_USER_AGENT
        - SOAP_DO_DEFAULT_ROOT_NAME
        - SOAP_DO_PRETTY_PRINT
        - SOAP_DO_DEBUG
    """
    configure(
        timeout=_get_env_float("SOAP_DO_TIMEOUT"),
        user_agent=_get_env("SOAP_DO_USER_AGENT"),
        default_root_name=_get_env("SOAP_DO_DEFAULT_ROOT_NAME"),
        pretty_print=_get_env_flag("SOAP_DO_PRETTY_PRINT"),
        debug=_get_env_flag("SOAP_DO_DEBUG"),
    )
