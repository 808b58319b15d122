"""
Deterministic keyword insertion.

Picks the sentence that best fits a keyword phrase and splices the phrase
in at a grammatically plausible word boundary, without any grammar model:
- Segment text into sentence bodies and their ". ", "! ", "? " delimiters
- Score bodies by phrase-word overlap, preferring middle sentences
- Insert ~30% into the sentence, after a nearby article or preposition
"""

import logging
import math
import re
from typing import Optional

from .models import InsertionPoint

logger = logging.getLogger(__name__)

_DELIMITER_RE = re.compile(r"(\. |! |\? )")
_NON_WORD_RE = re.compile(r"\W")

CONNECTIVES = frozenset({"the", "a", "an", "of", "in", "on", "at", "by", "for", "with", "to"})

MIN_SENTENCE_LENGTH = 10
WORD_MATCH_POINTS = 10
MIDDLE_POSITION_BONUS = 5
INSERTION_RATIO = 0.3
CONNECTIVE_LOOKAHEAD = 2


def segment_text(text: str) -> list[str]:
    """
    Split text into alternating sentence bodies and delimiters.

    Blank fragments are discarded, so bodies sit at even indices for
    ordinary prose. Joining the result rebuilds the text minus any
    whitespace-only fragments.
    """
    return [part for part in _DELIMITER_RE.split(text) if part.strip()]


def score_sentence(sentence: str, phrase_words: list[str], index: int, total: int) -> int:
    """
    Score how well a sentence suits the phrase.

    Args:
        sentence: Candidate sentence body.
        phrase_words: Lower-cased words of the keyword phrase.
        index: Position of the sentence in the segmented sequence.
        total: Length of the segmented sequence.

    Returns:
        10 points per phrase word found in the sentence, plus 5 when the
        sentence sits strictly between the 20% and 80% marks.
    """
    lowered = sentence.lower()
    score = sum(WORD_MATCH_POINTS for word in phrase_words if word in lowered)

    position = index / total
    if 0.2 < position < 0.8:
        score += MIDDLE_POSITION_BONUS

    return score


def find_insertion_index(words: list[str]) -> int:
    """
    Choose the word index to insert at.

    Starts 30% into the sentence and moves to just after the first
    connective found within the next two words. The final word is never
    considered, so a phrase is not inserted after the sentence's last word.
    """
    insert_at = math.floor(len(words) * INSERTION_RATIO)

    stop = min(insert_at + CONNECTIVE_LOOKAHEAD + 1, len(words) - 1)
    for i in range(insert_at, stop):
        if _NON_WORD_RE.sub("", words[i]).lower() in CONNECTIVES:
            return i + 1

    return insert_at


def plan_insertion(text: str, phrase: str) -> Optional[InsertionPoint]:
    """
    Work out where `phrase` would be inserted into `text`.

    Returns:
        The chosen sentence and word index, or None when nothing can be
        inserted (blank phrase, or no sentence of at least 10 characters).
    """
    phrase_words = phrase.lower().split()
    if not phrase_words:
        return None

    parts = segment_text(text)
    candidates = [
        i for i in range(0, len(parts), 2)
        if len(parts[i].strip()) >= MIN_SENTENCE_LENGTH
    ]
    if not candidates:
        return None

    # Strict > keeps the earliest of equally scored sentences; with no
    # positive score the first sentence of the text is used.
    best_index = 0
    best_score = 0
    for i in candidates:
        score = score_sentence(parts[i], phrase_words, i, len(parts))
        if score > best_score:
            best_score = score
            best_index = i

    words = parts[best_index].split(" ")
    return InsertionPoint(
        sentence_index=best_index,
        word_index=find_insertion_index(words),
        score=best_score,
    )


def insert_keyword(text: str, phrase: str) -> str:
    """
    Insert a keyword phrase into the best-fitting sentence of a text.

    Never raises: when no insertion point exists the original text is
    returned unchanged.

    Args:
        text: Text to modify.
        phrase: Keyword phrase to insert as a single token.

    Returns:
        The text with the phrase spliced in.
    """
    point = plan_insertion(text, phrase)
    if point is None:
        logger.warning(f"No insertion point for '{phrase}'; text left unchanged")
        return text

    parts = segment_text(text)
    words = parts[point.sentence_index].split(" ")
    words.insert(point.word_index, phrase.strip())
    parts[point.sentence_index] = " ".join(words)

    logger.debug(
        f"Inserted '{phrase}' into sentence {point.sentence_index} "
        f"at word {point.word_index} (score {point.score})"
    )
    return "".join(parts)
