from __future__ import annotations


class ReportImportError(Exception):
    pass


class FetchError(ReportImportError):
    """Raised when an upstream report or history request does not succeed."""


class DocumentError(ReportImportError):
    """Raised when the generated front matter does not satisfy the content schema."""
