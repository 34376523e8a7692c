"""
Relaxed JSON reader for ``bun.lock``.

Bun writes its text lockfile as JSON with trailing commas and accepts
``//`` and ``/* */`` comments in it. ``json`` rejects both, so the text is
cleaned up first.
"""

import json
import re
from typing import Any

# Groups: double quoted string, single quoted string, block comment,
# line comment. Strings are matched first so comment markers inside
# them are left alone.
_COMMENT_RE = re.compile(
    r"(\"[^\"\\]*(?:\\.[^\"\\]*)*\")"
    r"|('[^'\\]*(?:\\.[^'\\]*)*')"
    r"|(/\*[^/*]*(?:(?:\*|/)[^/*]*)*?\*/)"
    r"|(/{2,}.*?(?:\r?\n|$))"
)

# Groups: double quoted string, single quoted string, trailing comma.
_TRAILING_COMMA_RE = re.compile(
    r"(\"[^\"\\]*(?:\\.[^\"\\]*)*\")"
    r"|('[^'\\]*(?:\\.[^'\\]*)*')"
    r"|(,\s*[}\]])"
)


def _replace_comment(match: re.Match) -> str:
    block_comment, line_comment = match.group(3), match.group(4)
    if block_comment:
        return ""
    if line_comment:
        # Keep the line break so line numbers in errors stay meaningful
        if line_comment.endswith("\r\n"):
            return "\r\n"
        if line_comment.endswith("\n"):
            return "\n"
        return ""
    return match.group(0)


def _replace_trailing_comma(match: re.Match) -> str:
    if match.group(3):
        return match.group(3)[1:]
    return match.group(0)


def strip_comments(content: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of string literals.

    String continuation across lines is not supported, as in JSON itself.
    """
    return _COMMENT_RE.sub(_replace_comment, content)


def strip_trailing_commas(content: str) -> str:
    """Remove commas directly followed by ``}`` or ``]`` outside of strings."""
    return _TRAILING_COMMA_RE.sub(_replace_trailing_comma, content)


def parse(content: str) -> Any:
    """
    Parse JSON that may contain comments and trailing commas.

    Comments are always removed. Trailing commas are only removed when the
    comment-free text is not valid JSON on its own.

    Args:
        content: Text of the document.

    Returns:
        The decoded document.

    Raises:
        json.JSONDecodeError: If the text is not valid even after cleanup.
    """
    without_comments = strip_comments(content)
    try:
        return json.loads(without_comments)
    except json.JSONDecodeError:
        return json.loads(strip_trailing_commas(without_comments))
