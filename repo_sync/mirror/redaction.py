"""
Credential Redaction — Strip embedded tokens from text.

Authenticated git URLs look like ``https://x-access-token:<token>@host/...``.
Anything that may contain one (git stderr, exception text, log lines)
goes through ``sanitize`` before it reaches a log, an error or a summary.

Known limit: a token longer than 200 characters is not fully matched.
"""

from __future__ import annotations

import logging
import re
from typing import Union

CREDENTIAL_PATTERN = re.compile(r"x-access-token:[^@]{1,200}@")
CREDENTIAL_REPLACEMENT = "x-access-token:***@"


def sanitize(error: Union[BaseException, str, None]) -> str:
    """
    Replace every ``x-access-token:<secret>@`` with ``x-access-token:***@``.

    Accepts an exception, a string or None. Text without credentials is
    returned unchanged; None (or an exception with no message) gives "".
    """
    if error is None:
        return ""
    text = error if isinstance(error, str) else str(error)
    return CREDENTIAL_PATTERN.sub(CREDENTIAL_REPLACEMENT, text)


class RedactingFilter(logging.Filter):
    """Logging filter that sanitizes every record's rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = sanitize(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
