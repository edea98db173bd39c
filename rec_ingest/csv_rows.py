from __future__ import annotations

"""
Parse raw recommendation exports into rows.

The exports are comma-separated with a header row.  Every value is kept
as text: identifiers such as ``-9.19255E+18`` look numeric but are
opaque keys and must not be coerced.
"""

import io
from typing import Dict, List

import pandas as pd
from loguru import logger

from .errors import ParseError

Row = Dict[str, str]


def _read_frame(text: str) -> pd.DataFrame:
    # header=None so the header row fixes the field count for every line;
    # a longer line is then a tokenizer error instead of an inferred index.
    try:
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except pd.errors.ParserError as e:
        logger.warning("CSV parse failed: {}", e)
        raise ParseError(f"Malformed CSV: {e}") from e


def parse_rows(text: str) -> List[Row]:
    """
    Convert CSV text into an ordered list of ``{header: value}`` rows.

    - header names are trimmed of surrounding whitespace
    - blank lines are skipped
    - short rows are padded with empty strings
    - any tokenizer error (extra fields, unterminated quote) raises
      :class:`ParseError` for the whole document
    """
    if text is None:
        return []
    text = text.lstrip("\ufeff")
    if not text.strip():
        return []

    df = _read_frame(text)
    if df.empty:
        return []

    df = df.fillna("")
    header = [str(h).strip() for h in df.iloc[0].tolist()]
    rows: List[Row] = [
        dict(zip(header, values))
        for values in df.iloc[1:].itertuples(index=False, name=None)
    ]
    logger.debug("Parsed {} rows with columns {}", len(rows), header)
    return rows
