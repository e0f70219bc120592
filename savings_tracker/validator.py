"""
Savings Tracker - Amount Parsing Module.

This module converts user-entered text into floating-point amounts.
Parsing is deliberately strict: only a plain decimal number, optionally
signed and optionally with an exponent, is accepted. Anything else is
treated as "not a number" and callers leave their state untouched.

Accepted:
    - "250", "250.", "250.75", ".5"
    - "-50", "+12.5"
    - "1e3", "2.5E-2"

Rejected:
    - "", "   ", " 250" (surrounding whitespace)
    - "abc", "1.2.3", "1,000", "1_000"
    - "nan", "inf", "-Infinity" and values that overflow to infinity

Classes:
    AmountParser: Parses goal and amount text.
"""

import logging
import math
import re
from typing import Optional

logger = logging.getLogger(__name__)


class AmountParser:
    """
    Parses free-form text into floating-point amounts.

    Example:
        >>> parser = AmountParser()
        >>> parser.parse("250")
        250.0
        >>> parser.parse("abc") is None
        True
    """

    NUMBER_PATTERN = re.compile(
        r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?",
        re.ASCII
    )

    def parse(self, text: Optional[str]) -> Optional[float]:
        """
        Parses text as a finite floating-point number.

        Args:
            text: Text to parse. None is treated as empty.

        Returns:
            The parsed float, or None if the text is not a number.
        """
        if not text or not self.NUMBER_PATTERN.fullmatch(text):
            return None

        value = float(text)
        if not math.isfinite(value):
            logger.debug("Rejected non-finite amount %r", text)
            return None

        return value

    def is_number(self, text: Optional[str]) -> bool:
        """Returns True if the text parses as a number."""
        return self.parse(text) is not None
