import logging
import re
from typing import Iterable, Union


_LONG_HEX = re.compile(r"\b([0-9a-fA-F]{12})[0-9a-fA-F]{20,}\b")


class DigestFilter(logging.Filter):
    """Shorten full-length hex digests in log records to a 12-char prefix."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        short = _LONG_HEX.sub(r"\1...", msg)
        if short != msg:
            record.msg = short
            record.args = None
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("merkle_core", "merkle_sdk", "merkle_cli"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)
    f = DigestFilter()
    # Logger filters skip records propagated from child loggers, handler filters do not
    for handler in logging.getLogger().handlers:
        if not any(isinstance(x, DigestFilter) for x in handler.filters):
            handler.addFilter(f)
    for name in loggers:
        logging.getLogger(name).setLevel(level)
