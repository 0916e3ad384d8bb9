"""
logging_config.py
------------------

This module defines a shared logging configuration and utilities for
structured logging throughout the product catalog.  It uses Python's
built‑in ``logging`` module rather than ``print`` so that log output
can be captured by standard logging handlers or external systems such
as ELK, Grafana or Datadog.  Messages are serialised as JSON to make
them easier to parse downstream.

To use this module, import ``logger`` (or :func:`log_event`) instead
of calling ``logging.info`` directly.  The ``log_call`` decorator can
be applied to functions and coroutines to record entry and exit points
at the DEBUG level without leaking binary payloads or secrets.
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from functools import wraps
from typing import Any, Callable, Dict

from app.core.config import get_settings

# -----------------------------------------------------------------------------
# Configure global logging
# -----------------------------------------------------------------------------

# Set up the root logger once.  We direct log output to stdout and format
# messages with a timestamp, log level and the raw message.  The message
# itself should be a JSON string so downstream consumers can parse it easily.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("catalog")
logger.setLevel(get_settings().log_level.upper())


def _sanitize(obj: Any) -> Any:
    """Recursively sanitise objects for logging.

    Dictionaries have keys containing 'token', 'password' or 'secret'
    removed, byte strings are replaced by their length and pydantic
    models are dumped to plain data.  Anything that still cannot be
    represented as JSON falls back to ``str``.
    """
    if isinstance(obj, (bytes, bytearray)):
        return f"<binary {len(obj)} bytes>"
    if isinstance(obj, dict):
        clean: Dict[str, Any] = {}
        for k, v in obj.items():
            if any(keyword in str(k).lower() for keyword in ("token", "password", "secret")):
                continue
            clean[str(k)] = _sanitize(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [_sanitize(i) for i in obj]
    if hasattr(obj, "model_dump"):
        try:
            return _sanitize(obj.model_dump(mode="json"))
        except Exception:
            return str(obj)
    try:
        return json.loads(json.dumps(obj))  # ensure JSON serialisable
    except (TypeError, ValueError):
        return str(obj)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a single JSON log line ``{"event": event, **fields}``."""
    if not logger.isEnabledFor(level):
        return
    logger.log(level, json.dumps({"event": event, **_sanitize(fields)}))


def log_call(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log entry and exit of functions.

    This decorator logs a DEBUG level message before a function is executed
    and another after it returns.  The messages include the function name
    and a sanitised snapshot of the arguments.  Coroutine functions are
    awaited inside the wrapper so the ``call_end`` event is emitted once the
    coroutine has actually finished.

    Examples
    --------

    >>> @log_call
    ... async def fetch(key):
    ...     return key
    """

    def _start(args: Any, kwargs: Any) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            log_event("call_start", logging.DEBUG, function=func.__qualname__, args=args, kwargs=kwargs)

    def _end() -> None:
        if logger.isEnabledFor(logging.DEBUG):
            log_event("call_end", logging.DEBUG, function=func.__qualname__)

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            _start(args, kwargs)
            result = await func(*args, **kwargs)
            _end()
            return result

        return async_wrapper

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        _start(args, kwargs)
        result = func(*args, **kwargs)
        _end()
        return result

    return wrapper
