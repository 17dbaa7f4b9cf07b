"""Structured logging for guest file operations and security events.

Provides BridgeLogger class that uses structlog for structured event emission
(file operations, default manager creation, security events). Configures
structlog with console rendering by default but allows custom configuration.
Only guest paths are ever logged.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_structlog(level: int = logging.INFO, use_json: bool = False) -> None:
    """Configure structlog with sensible defaults for bridge logging.

    Args:
        level: Minimum log level (default: logging.INFO)
        use_json: If True, use JSON renderer; otherwise use console renderer
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class BridgeLogger:
    """Wrapper for structured logging of bridge events.

    Accepts either structlog or standard logging.Logger instances and normalizes
    emission so callers do not need to care which backend is in use.
    """

    _PATH_TRUNCATION_SUFFIX = "...[truncated]"
    _MAX_PATH_LENGTH = 140

    def __init__(self, logger: Any = None) -> None:
        """Initialize BridgeLogger with optional custom logger.

        Args:
            logger: Optional structlog BoundLogger, logging.Logger, or string name.
                    If None, a default structlog logger named 'fsbridge' is created.
                    If string, creates a structlog logger with that name.
        """
        if logger is None:
            self._logger = structlog.get_logger("fsbridge")
        elif isinstance(logger, str):
            self._logger = structlog.get_logger(logger)
        else:
            self._logger = logger

    @property
    def logger(self) -> Any:
        """Expose the underlying logger instance (structlog or logging.Logger)."""
        return self._logger

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        """Emit a log record regardless of logger backend."""
        extra = dict(fields)
        extra.setdefault("event", message.split(".", 1)[-1] if "." in message else message)

        if isinstance(self._logger, logging.Logger):
            # Standard logging expects structured data in the 'extra' mapping
            self._logger.log(level, message, extra=extra)
            return

        method_name = logging.getLevelName(level).lower()
        log_method = getattr(self._logger, method_name, None)
        if not callable(log_method):
            log_method = self._logger.info

        log_kwargs = dict(extra)
        event_value = log_kwargs.pop("event", None)
        event_arg = event_value if event_value is not None else message
        log_method(event_arg, **log_kwargs)

    def _truncate_path(self, path: str) -> str:
        """Truncate long guest paths to keep logs concise."""
        if len(path) <= self._MAX_PATH_LENGTH:
            return path
        keep = self._MAX_PATH_LENGTH - len(self._PATH_TRUNCATION_SUFFIX)
        return f"{path[:keep]}{self._PATH_TRUNCATION_SUFFIX}"

    def log_session_created(self, app_id: str, home_directory: str, backend: str) -> None:
        """Log the creation of a bridge session.

        Args:
            app_id: Application identifier
            home_directory: Guest home directory
            backend: Storage backend name ("disk" or "memory")
        """
        self._emit(
            logging.INFO,
            "bridge.session.created",
            event="session.created",
            app_id=app_id,
            home_directory=home_directory,
            backend=backend,
        )

    def log_manager_created(self, app_id: str) -> None:
        """Log the lazy creation of the session's default file manager."""
        self._emit(
            logging.INFO,
            "bridge.manager.created",
            event="manager.created",
            app_id=app_id,
        )

    def log_file_operation(self, operation: str, path: str | None, success: bool, **kwargs: Any) -> None:
        """Log a guest file operation.

        Emits an INFO-level structured log event for facade operations
        (exists, create, remove, copy, list, read, ...).

        Args:
            operation: Operation name (e.g., "exists", "remove", "copy")
            path: Guest path the operation was applied to
            success: Guest-visible success value
            **kwargs: Operation-specific metadata:
                - file_size: Size in bytes for read/write operations
                - entry_count: Number of entries for listing operations
                - is_directory: Directory flag for existence checks
                - destination: Target path for copy operations
        """
        event = f"file.{operation}"
        self._emit(
            logging.INFO,
            f"bridge.{event}",
            event=event,
            path=self._truncate_path(path) if path is not None else None,
            success=success,
            **kwargs,
        )

    def log_operation_failed(self, operation: str, path: str | None, cause: str | None) -> None:
        """Log a host failure that was translated into a guest failure value.

        Args:
            operation: Operation name
            path: Guest path the operation was applied to
            cause: Exception type name reported by the storage backend
        """
        self._emit(
            logging.WARNING,
            "bridge.file.failed",
            event="file.failed",
            operation=operation,
            path=self._truncate_path(path) if path is not None else None,
            cause=cause,
        )

    def log_security_event(self, event_type: str, details: dict[str, Any]) -> None:
        """Log a security-relevant event at WARNING level.

        Args:
            event_type: Type of security event (e.g., "path_escape")
            details: Dict containing event-specific details
        """
        event = f"security.{event_type}"
        self._emit(logging.WARNING, f"bridge.{event}", event=event, **details)

    def log_unsupported(self, operation: str, reason: str) -> None:
        """Log a fatal unsupported-feature condition just before it is raised.

        Args:
            operation: Operation name
            reason: Human-readable description of the missing feature
        """
        self._emit(
            logging.ERROR,
            "bridge.unsupported",
            event="unsupported",
            operation=operation,
            reason=reason,
        )
