# app/utils/parser.py
import io
import logging
import warnings
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from app.core.exceptions import MalformedInput, MissingHeaders

logger = logging.getLogger(__name__)

RawRow = Dict[str, str]


def parse_csv(content: bytes) -> Tuple[List[RawRow], List[str]]:
    """
    Parse uploaded CSV bytes into header-keyed rows.
    The first non-blank line is the header. Blank lines and lines made only
    of empty cells are skipped; short rows are padded with empty strings.
    Returns (rows, header) with the header in file order.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise MalformedInput("Invalid file encoding — please save as UTF-8 (with or without BOM).")

    if not text.strip():
        raise MalformedInput("CSV has no headers or is empty.")

    try:
        # a row one cell wider than the header only warns; treat it as malformed
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                index_col=False,
                skip_blank_lines=True,
            )
    except pd.errors.EmptyDataError:
        raise MalformedInput("CSV has no headers or is empty.")
    except (pd.errors.ParserError, pd.errors.ParserWarning) as e:
        logger.warning(f"CSV parse failed: {e}")
        raise MalformedInput(f"Could not parse CSV: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")

    if len(df.index):
        blank = df.apply(lambda col: col.str.strip().eq("")).all(axis=1)
        df = df[~blank]

    header = list(df.columns)
    rows = df.to_dict(orient="records")
    return rows, header


def check_header(header: Iterable[str], required: Iterable[str]) -> None:
    """Raise MissingHeaders naming every required column absent from the header."""
    present = set(header)
    missing = [name for name in required if name not in present]
    if missing:
        raise MissingHeaders(missing)
