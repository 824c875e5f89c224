import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the current definitions load id across the call chain
_LOAD_ID: contextvars.ContextVar[str] = contextvars.ContextVar("load_id", default="-")


class _LoadIdFilter(logging.Filter):
    """Logging filter that injects the load_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.load_id = _LOAD_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | load=%(load_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _ensure_handler() -> None:
    root = logging.getLogger()

    # Check if we already configured our handler (has _LoadIdFilter)
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _LoadIdFilter) for f in h.filters):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_LoadIdFilter())
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure root logger and thingmeta-specific logger.

    Root logger stays at INFO to suppress library noise.
    Only thingmeta namespace logs are set to the requested level.

    Args:
        level: Log level for thingmeta logs (DEBUG, INFO, WARNING, ERROR).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    _ensure_handler()
    logging.getLogger("thingmeta").setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "thingmeta") -> logging.Logger:
    """
    Get a module-specific logger writing to stdout with the load id attached.
    """
    _ensure_handler()
    return logging.getLogger(name)


def current_load_id() -> str:
    return _LOAD_ID.get()


def push_load_id(load_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current load id in context and return a token for later reset."""
    if not load_id:
        return None
    return _LOAD_ID.set(load_id)


def reset_load_id(token: Optional[contextvars.Token]) -> None:
    """Reset the load id context using the provided token (if any)."""
    if token is None:
        return
    _LOAD_ID.reset(token)
