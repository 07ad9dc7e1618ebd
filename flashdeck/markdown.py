"""Line patterns and text helpers shared by the extraction passes."""

import re
from typing import List, Optional, Sequence

from .config import MARKER_LOOKBACK
from .models import CodeType

FENCE_LINE = re.compile(r"^```(\w+)?")
QUESTION_LINE = re.compile(r"^\*\*Q:\s*(.+?)\*\*$")
ANSWER_LINE = re.compile(r"^A:\s*(.+)")
HEADING_LINE = re.compile(r"^#+\s")
H2_LINE = re.compile(r"^##\s+(.+)")
H3_LINE = re.compile(r"^###\s+(.+)")
RULE_LINE = re.compile(r"^---+$")
BULLET_LINE = re.compile(r"^\s*[-*]\s+(.+)")

GOOD_MARKER = "\u2705"  # ✅
BAD_MARKER = "\u274c"  # ❌

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_INLINE_CODE = re.compile(r"`(.+?)`")
_LINK = re.compile(r"\[(.+?)\]\(.+?\)")


def split_lines(markdown: str) -> List[str]:
    return re.split(r"\r?\n", markdown)


def _clean_once(text: str) -> str:
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    return text.strip()


def clean_markdown(text: str) -> str:
    """Strip emphasis, inline code and link syntax from a line of prose.

    Every substitution shortens the text, so repeating the passes until
    nothing changes terminates and makes the result stable under another
    call.

    Example:
        >>> clean_markdown("**Use** `var` for [locals](https://example.com) ")
        'Use var for locals'
    """
    cleaned = _clean_once(text)
    while cleaned != text:
        text = cleaned
        cleaned = _clean_once(text)
    return cleaned


def detect_code_type(lines: Sequence[str], fence_index: int,
                     lookback: int = MARKER_LOOKBACK) -> Optional[CodeType]:
    """Look up to `lookback` lines above a fence for a good/bad marker.

    The nearest marked line wins; on a single line the bad marker is checked
    first.

    Returns:
        'good', 'bad', or None when no marker is found.
    """
    for j in range(fence_index - 1, max(0, fence_index - lookback) - 1, -1):
        prev = lines[j].strip()
        lowered = prev.lower()
        if BAD_MARKER in prev or "bad example" in lowered:
            return "bad"
        if GOOD_MARKER in prev or "good example" in lowered:
            return "good"
    return None


def is_heading(line: str) -> bool:
    return bool(HEADING_LINE.match(line))


def is_rule(line: str) -> bool:
    return bool(RULE_LINE.match(line))
