"""User-facing failures raised by the analysis pipeline."""

from __future__ import annotations


class PatentAnalysisError(Exception):
    """Base class for errors that are reported to the uploader verbatim."""

    default_message = "Patent analysis failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class UnsupportedFileTypeError(PatentAnalysisError):
    default_message = "Only CSV files can be uploaded."


class EmptyFileError(PatentAnalysisError):
    default_message = "The CSV file is empty."


class MissingDateColumnError(PatentAnalysisError):
    default_message = (
        "Application date column not found. Make sure the CSV file is a J-PlatPat export."
    )


class AnalysisError(PatentAnalysisError):
    """Unexpected failure while parsing or aggregating an upload."""

    prefix = "Error while analysing data: "

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}{detail}")
