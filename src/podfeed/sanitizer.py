"""Plain-text derivation for rich-text feed fields."""

import re

# Non-greedy so adjacent tags are removed one by one; [\s\S] spans newlines
_HTML_TAG_RE = re.compile(r"<[\s\S]*?>")


def strip_html(text: str) -> str:
    """Remove markup tags from text, leaving everything between them untouched.

    Entities are not decoded and whitespace is not normalized.

    Args:
        text: Text potentially containing HTML

    Returns:
        Text with all ``<...>`` tags removed
    """
    if not text:
        return ""
    return _HTML_TAG_RE.sub("", text)
