import logging

from shared.logging_utils import RedactingFormatter, configure_logging


def test_redacting_formatter_masks_longest_secret_first():
    formatter = RedactingFormatter(logging.Formatter("%(message)s"), secrets=["s3cr3t", "s3cr3t-long"])
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "token=%s", ("s3cr3t-long",), None)

    assert formatter.format(record) == "token=[REDACTED]"


def test_configure_logging_wraps_named_handlers(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abcdef")
    handler = logging.StreamHandler()
    named = logging.getLogger("jeopardy_game.test_logger")
    named.addHandler(handler)
    try:
        configure_logging(level="INFO", extra_values=["webhook-pass", None])
        assert isinstance(handler.formatter, RedactingFormatter)
        record = logging.LogRecord(
            "x", logging.INFO, __file__, 1, "bot %s secret %s", ("123:abcdef", "webhook-pass"), None
        )
        output = handler.formatter.format(record)
        assert "123:abcdef" not in output
        assert "webhook-pass" not in output
        assert "[REDACTED]" in output
    finally:
        named.removeHandler(handler)
