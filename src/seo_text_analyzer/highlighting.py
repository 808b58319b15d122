"""
Keyword highlighting with change markers.

Occurrences of analysis keywords are wrapped in [[[ADD]]]...[[[ENDADD]]]
markers so the CLI and the Word report can render them highlighted.
"""

import re
from typing import Sequence

from .models import Keyword

# Marker tags for identifying highlighted content
ADD_START = "[[[ADD]]]"
ADD_END = "[[[ENDADD]]]"

_SEGMENT_RE = re.compile(rf"{re.escape(ADD_START)}(.*?){re.escape(ADD_END)}", re.DOTALL)


def mark_keywords(text: str, keywords: Sequence[Keyword]) -> str:
    """
    Wrap every whole-phrase keyword occurrence in markers.

    All phrases are matched in a single pass, longest first, so a short
    keyword inside a longer one ("learning" in "machine learning") is not
    marked twice. The text's own casing is preserved.

    Args:
        text: Text to highlight.
        keywords: Keywords whose occurrences should be marked.

    Returns:
        Text with [[[ADD]]]...[[[ENDADD]]] markers.
    """
    phrases = {" ".join(kw.text.split()) for kw in keywords}
    phrases.discard("")
    if not text or not phrases:
        return text

    alternatives = [
        r"\s+".join(re.escape(word) for word in phrase.split())
        for phrase in sorted(phrases, key=len, reverse=True)
    ]
    pattern = re.compile(rf"(?<!\w)(?:{'|'.join(alternatives)})(?!\w)", re.IGNORECASE)

    return pattern.sub(lambda m: f"{ADD_START}{m.group(0)}{ADD_END}", text)


def strip_markers(text: str) -> str:
    """
    Remove all ADD markers from text, returning clean text.

    Args:
        text: Text with markers.

    Returns:
        Clean text without markers.
    """
    return text.replace(ADD_START, "").replace(ADD_END, "")


def has_markers(text: str) -> bool:
    """Check if text contains any ADD markers."""
    return ADD_START in text or ADD_END in text


def parse_marker_segments(text: str) -> list[tuple[str, bool]]:
    """
    Parse text with markers into segments.

    Returns list of (text, is_highlighted) tuples.
    """
    segments: list[tuple[str, bool]] = []
    last_end = 0

    for match in _SEGMENT_RE.finditer(text):
        if match.start() > last_end:
            segments.append((text[last_end:match.start()], False))
        if match.group(1):
            segments.append((match.group(1), True))
        last_end = match.end()

    if last_end < len(text):
        segments.append((text[last_end:], False))

    return segments
