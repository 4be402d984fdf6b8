from __future__ import annotations

import hashlib
from pathlib import Path


class DataAccessError(Exception):
    code = "INSPECT_DATA_ACCESS_ERROR"


class InputNotPdfError(DataAccessError):
    code = "INSPECT_INPUT_NOT_PDF"


class InputNotFoundError(DataAccessError):
    code = "INSPECT_INPUT_NOT_FOUND"


def locate_pdf(*, data_root: Path, pdf_relpath: str) -> Path:
    """
    Find an existing `.pdf` file at `pdf_relpath` inside `data_root`.

    The extension is checked first, then containment (no absolute paths, no
    escapes through `..` or symlinks), then existence.
    """

    if Path(pdf_relpath).suffix.lower() != ".pdf":
        raise InputNotPdfError("Only PDFs are accepted (by .pdf extension)")
    if Path(pdf_relpath).is_absolute() or pdf_relpath.startswith(("/", "\\")):
        raise DataAccessError(f"Expected a path relative to data_root, got: {pdf_relpath!r}")

    root = data_root.expanduser().resolve()
    pdf_file = (root / pdf_relpath).resolve()
    if not pdf_file.is_relative_to(root):
        raise DataAccessError(f"{pdf_relpath!r} points outside data_root")
    if not pdf_file.is_file():
        raise InputNotFoundError("Input PDF not found")
    return pdf_file


def read_pdf_bytes(*, data_root: Path, pdf_relpath: str) -> bytes:
    pdf_file = locate_pdf(data_root=data_root, pdf_relpath=pdf_relpath)
    try:
        return pdf_file.read_bytes()
    except OSError as e:
        raise DataAccessError(f"Cannot read {pdf_relpath}: {e.strerror or e}") from e


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
