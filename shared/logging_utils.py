import logging
import os
from typing import Iterable, Optional, Sequence, Set

_REDACTED_PLACEHOLDER = "[REDACTED]"
_SENSITIVE_KEY_PARTS = ("TOKEN", "SECRET", "KEY", "PASS", "PWD")
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_QUIET_LOGGERS = ("httpx", "telegram.ext.Updater")


def _is_sensitive_env_var(name: str) -> bool:
    upper_name = name.upper()
    return any(part in upper_name for part in _SENSITIVE_KEY_PARTS)


def _collect_sensitive_values(extra_values: Optional[Iterable[Optional[str]]] = None) -> Sequence[str]:
    secrets: Set[str] = {
        value for key, value in os.environ.items() if value and _is_sensitive_env_var(key)
    }
    for value in extra_values or ():
        if isinstance(value, str) and value:
            secrets.add(value)
    return tuple(secrets)


def _longest_first(secrets: Optional[Sequence[str]]) -> Sequence[str]:
    # A secret that contains another one must be masked whole.
    return tuple(sorted(set(secrets or ()), key=len, reverse=True))


class RedactingFormatter(logging.Formatter):
    """Wrap another formatter and mask bot tokens and webhook secrets in its output."""

    def __init__(
        self,
        base_formatter: Optional[logging.Formatter] = None,
        secrets: Optional[Sequence[str]] = None,
        placeholder: str = _REDACTED_PLACEHOLDER,
    ) -> None:
        super().__init__()
        self._base_formatter = base_formatter or logging.Formatter(_DEFAULT_FORMAT)
        self._secrets: Sequence[str] = _longest_first(secrets)
        self._placeholder = placeholder
        self.converter = self._base_formatter.converter

    def update_secrets(self, secrets: Sequence[str]) -> None:
        self._secrets = _longest_first(secrets)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, self._placeholder)
        return text

    def format(self, record: logging.LogRecord) -> str:
        return self.redact(self._base_formatter.format(record))

    def formatException(self, ei):
        return self.redact(self._base_formatter.formatException(ei))

    def formatTime(self, record, datefmt=None):
        return self._base_formatter.formatTime(record, datefmt)


def _install_redaction(handler: logging.Handler, secrets: Sequence[str]) -> None:
    formatter = handler.formatter
    if isinstance(formatter, RedactingFormatter):
        formatter.update_secrets(secrets)
    else:
        handler.setFormatter(RedactingFormatter(formatter, secrets))


def configure_logging(
    *,
    level: Optional[str] = None,
    extra_values: Optional[Iterable[Optional[str]]] = None,
) -> None:
    """Configure root logging for the bot and web board.

    Every handler, on the root logger and on named loggers, gets a redacting
    formatter so the Telegram token and webhook secret never reach the logs.
    Request logs of the HTTP client used by python-telegram-bot are lowered to
    WARNING because their URLs embed the bot token.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_FORMAT)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    secrets = _collect_sensitive_values(extra_values)

    for handler in root_logger.handlers:
        _install_redaction(handler, secrets)

    for logger_obj in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger_obj, logging.Logger):
            continue
        for handler in logger_obj.handlers:
            _install_redaction(handler, secrets)
