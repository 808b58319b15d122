"""
Keyword list export to CSV.

Writes the ranked keywords of an analysis in the same column layout that
keyword research tools accept on import.
"""

import io
from pathlib import Path
from typing import Sequence, TextIO, Union

import pandas as pd

from .models import Keyword

EXPORT_COLUMNS = ["keyword", "difficulty", "volume", "relevance_score", "context"]


class KeywordExportError(Exception):
    """Raised when keyword export fails."""
    pass


def keywords_to_dataframe(keywords: Sequence[Keyword]) -> pd.DataFrame:
    """
    Build a DataFrame of keywords in ranked order.

    Args:
        keywords: Keywords to export.

    Returns:
        DataFrame with one row per keyword and EXPORT_COLUMNS as columns.
    """
    rows = [
        {
            "keyword": kw.text,
            "difficulty": kw.difficulty,
            "volume": kw.volume,
            "relevance_score": kw.relevance_score,
            "context": kw.context,
        }
        for kw in keywords
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_keywords_csv(
    keywords: Sequence[Keyword],
    destination: Union[str, Path, TextIO],
) -> None:
    """
    Write keywords as CSV to a file path or text buffer.

    Raises:
        KeywordExportError: If the destination cannot be written.
    """
    df = keywords_to_dataframe(keywords)
    try:
        df.to_csv(destination, index=False, encoding="utf-8")
    except OSError as e:
        raise KeywordExportError(f"Failed to write CSV file: {e}")


def keywords_to_csv(keywords: Sequence[Keyword]) -> str:
    """Render keywords as a CSV string."""
    buffer = io.StringIO()
    export_keywords_csv(keywords, buffer)
    return buffer.getvalue()
