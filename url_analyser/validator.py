# url_analyser/validator.py
# Syntactic gate deciding whether typed text may be submitted for analysis.

from __future__ import annotations

import re

# scheme, optional www., lowercase labels joined by "." or "-", 2-5 letter TLD,
# optional :port, optional path/query/fragment.
URL_PATTERN = re.compile(
    r"(https?://)(www\.)?[a-z0-9]+([\-.][a-z0-9]+)*\.[a-z]{2,5}(:[0-9]{1,5})?(/.*)?"
)


def is_submittable(text: str) -> bool:
    """
    Return True if `text` is, as a whole, a URL the client will submit.

    No network access happens here and whitespace is not trimmed, so a URL
    with leading or trailing spaces is rejected. A True result is no promise
    that the service can analyse the page.
    """
    if not isinstance(text, str):
        return False
    return URL_PATTERN.fullmatch(text) is not None
