"""
Structured logging with key=value and JSON output support.

Wraps the standard library ``logging`` module. Keyword arguments passed to
[Logger][zapnotes.core.logger.Logger] methods become structured fields,
rendered either as ``key=value`` pairs by
[StructuredFormatter][zapnotes.core.logger.StructuredFormatter] or as a JSON
object when ``json_output=True``.

Examples:
    ```python
    from zapnotes.core.logger import Logger

    logger = Logger("receipts")
    logger.info("query_completed", pubkey="ab12...", count=3)
    # Output: info receipts query_completed pubkey=ab12... count=3
    ```
"""

import datetime
import json
import logging
from typing import Any, ClassVar


_TRUNCATION_SUFFIX = "...<truncated {} chars>"


def _truncate(value: Any, max_value_length: int | None) -> Any:
    s = str(value)
    if max_value_length and len(s) > max_value_length:
        return s[:max_value_length] + _TRUNCATION_SUFFIX.format(len(s) - max_value_length)
    return value


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values longer than ``max_value_length`` are truncated. Values that are
    empty or contain whitespace, equals signs or quotes are escaped and
    wrapped in double quotes.

    Args:
        kwargs: Key-value pairs to format.
        max_value_length: Maximum characters per value, ``None`` to disable.
        prefix: String prepended to the output.

    Returns:
        Formatted string such as ``' relay=wss://x count=2'``, or ``""``
        when ``kwargs`` is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = str(_truncate(v, max_value_length))
        if not s or any(c in s for c in ' ="\''):
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")

    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Formats every record as ``level logger message key=value ...``.

    Structured fields come from the ``structured_kv`` extra attached by
    [Logger][zapnotes.core.logger.Logger]. Records from plain
    ``logging.getLogger()`` calls are emitted with the same prefix.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    Mirrors the standard logging API (``debug`` .. ``exception``) with an
    added ``**kwargs`` parameter.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = max_value_length

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_json(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "logger": self._logger.name,
            "message": msg,
            **{k: _truncate(v, self._max_value_length) for k, v in kwargs.items()},
        }
        return json.dumps(record, default=str)

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if self._json_output:
            level_name = logging.getLevelName(level).lower()
            self._logger.log(level, self._format_json(msg, level_name, kwargs), exc_info=exc_info)
            return
        extra = {}
        if kwargs:
            extra = {
                "structured_kv": {
                    k: _truncate(v, self._max_value_length) for k, v in kwargs.items()
                }
            }
        self._logger.log(level, msg, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
