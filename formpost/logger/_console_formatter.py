"""Reduced version of LogFormatter from Tornado (Copyright 2009 Facebook)
Original:
    https://github.com/tornadoweb/tornado/blob/1db5b45918da8303d2c6958ee03dbbd5dc2709e9/tornado/log.py#L81-L208
Licensed under:
    Apache-2.0 License (https://github.com/tornadoweb/tornado/blob/1db5b45918da8303d2c6958ee03dbbd5dc2709e9/LICENSE)
"""

# Internal
import os
import sys
from typing import Dict, Tuple, Literal, Optional
from logging import INFO, DEBUG, ERROR, WARNING, CRITICAL, Formatter, LogRecord


def _stderr_supports_color(colors: Optional[Dict[int, int]]) -> Optional[Dict[int, str]]:
    # Colors can be disabled with an env variable
    if colors is None or "NO_COLOR" in os.environ or os.name == "nt":
        return None

    if hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
        return {levelno: ("\033[2;3%dm" % code) for levelno, code in colors.items()}

    return None


def _safe_unicode(message: object) -> str:
    if isinstance(message, bytes):
        try:
            return message.decode("utf-8")
        except UnicodeDecodeError:
            return repr(message)
    return str(message) if message is not None else ""


class ConsoleFormatter(Formatter):
    """
    Log formatter based on the one used in Tornado. Key features of this formatter are:
    * Color support when logging to a terminal that supports it.
    * Timestamps on every log line.
    * Robust against str/bytes encoding problems.
    """

    DEFAULT_FORMAT = (
        "%(color)s[%(name)s]-[%(levelname)s]-[%(asctime)s]%(end_color)s %(message)s"
    )
    DEFAULT_COLORS = {
        DEBUG: 4,  # Blue
        INFO: 2,  # Green
        WARNING: 3,  # Yellow
        ERROR: 1,  # Red
        CRITICAL: 5,  # Magenta
    }
    DEFAULT_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
    NORMAL_COLOR = "\033[0m"

    def __init__(
        self,
        fmt: str = DEFAULT_FORMAT,
        datefmt: str = DEFAULT_DATE_FORMAT,
        style: Literal["%", "{", "$"] = "%",
        colors: Optional[Dict[int, int]] = DEFAULT_COLORS,
    ) -> None:
        super().__init__(fmt, datefmt, style)
        self._colors = _stderr_supports_color(colors)

    def _color_info(self, levelno: int) -> Tuple[str, str]:
        if self._colors and levelno in self._colors:
            return self._colors[levelno], self.NORMAL_COLOR
        return "", ""

    def format(self, record: LogRecord) -> str:
        try:
            record.message = _safe_unicode(record.getMessage())
        except Exception as exc:
            record.message = "Bad message"
            record.exc_info = (type(exc), exc, exc.__traceback__)

        record.asctime = self.formatTime(record, self.datefmt)
        color, end_color = self._color_info(record.levelno)

        formatted = (self._fmt if self._fmt else type(self).DEFAULT_FORMAT) % {
            **record.__dict__,
            "color": color,
            "end_color": end_color,
        }

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            # exc_text contains multiple lines, each one must be made safe separately
            lines = [formatted.rstrip()]
            lines.extend(_safe_unicode(ln) for ln in record.exc_text.split("\n"))
            formatted = "\n".join(lines)

        return formatted.replace("\n", "\n    ")


__all__ = ("ConsoleFormatter",)
