"""CSV tokenizing for uploaded exports."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from .errors import AnalysisError, EmptyFileError

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "cp932")
DELIMITER_CANDIDATES = ",\t;"
_SNIFF_SAMPLE_CHARS = 64 * 1024


@dataclass(slots=True)
class CsvTable:
    headers: list[str]
    rows: list[list[str]]
    delimiter: str
    encoding: str


def decode_upload(content: bytes, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> tuple[str, str]:
    """Decode raw upload bytes, trying each encoding in turn."""

    for encoding in encodings:
        try:
            return content.decode(encoding), encoding
        except UnicodeDecodeError:
            logger.debug("reader.decode.retry encoding=%s", encoding)
    raise AnalysisError(f"unable to decode file with any of {', '.join(encodings)}")


def guess_delimiter(text: str) -> str:
    sample = text[:_SNIFF_SAMPLE_CHARS]
    try:
        return csv.Sniffer().sniff(sample, delimiters=DELIMITER_CANDIDATES).delimiter
    except csv.Error:
        return ","


def header_width(text: str, delimiter: str) -> int:
    """Number of fields on the first non-blank line."""

    for row in csv.reader(io.StringIO(text), delimiter=delimiter):
        if row:
            return len(row)
    return 0


def read_csv_table(content: bytes, *, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> CsvTable:
    """Tokenize an uploaded CSV into a header row and string-valued data rows.

    Data lines longer than the header are cut to the header width; short lines
    are padded with empty strings.

    Raises:
        EmptyFileError: the file has no lines at all.
        AnalysisError: the bytes cannot be decoded or tokenized.
    """

    text, encoding = decode_upload(content, encodings)
    if not text.strip():
        raise EmptyFileError()

    delimiter = guess_delimiter(text)

    def truncate(fields: list[str]) -> list[str]:
        logger.debug("reader.line.truncated fields=%s width=%s", len(fields), width)
        return fields[:width]

    try:
        width = header_width(text, delimiter)
        frame = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=truncate,
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError() from exc
    except (pd.errors.ParserError, csv.Error) as exc:
        raise AnalysisError(str(exc)) from exc

    frame = frame.fillna("")
    records = [[str(value) for value in record] for record in frame.itertuples(index=False, name=None)]

    logger.debug(
        "reader.parsed rows=%s columns=%s delimiter=%r encoding=%s",
        len(records),
        frame.shape[1],
        delimiter,
        encoding,
    )

    return CsvTable(headers=records[0], rows=records[1:], delimiter=delimiter, encoding=encoding)
