"""Free-text input cleaning."""

import html
from typing import Any, Optional

import bleach


def sanitize_text(text: Any, max_length: Optional[int] = None) -> str:
    """
    Strip markup from user input.

    Returns plain text: entities bleach escapes are decoded again, since
    templates escape on output.
    """
    if not text:
        return ""
    text = str(text).strip()
    text = html.unescape(bleach.clean(text, tags=[], strip=True)).strip()
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text
