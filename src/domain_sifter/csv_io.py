"""
CSV input and output for batch runs.

Input files are headerless; the first field of each row is the domain and any
further fields are ignored. A row without a domain is a structural error that
aborts the run, unlike network failures which only skip one domain.
"""

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional, Protocol, TextIO

from .enums import InputErrorCode, OutputErrorCode
from .exceptions import InputError, OutputError
from .models import ScoredDomain


class DomainSink(Protocol):
    """Anything that accepts qualifying domains from a batch."""

    def write_domain(self, domain: str) -> None:
        ...


def read_domains(path: Path) -> Iterator[str]:
    """
    Open a headerless CSV file and iterate over its first column.

    The file is opened immediately so a missing file fails before any
    processing starts; rows are then read lazily. A leading UTF-8 byte order
    mark is dropped.

    Raises:
        InputError: If the file cannot be opened, or (while iterating) if a
            row is empty, has an empty first field, or is not valid CSV
    """
    try:
        handle = open(path, "r", encoding="utf-8-sig", newline="")
    except FileNotFoundError as e:
        raise InputError(
            code=InputErrorCode.FILE_NOT_FOUND.value,
            message=f"Unable to open input file: {path}",
            details={"path": str(path)},
        ) from e
    except OSError as e:
        raise InputError(
            code=InputErrorCode.READ_FAILED.value,
            message=f"Unable to open input file: {path}",
            details={"path": str(path)},
        ) from e

    return _iter_first_fields(handle, path)


def _iter_first_fields(handle: TextIO, path: Path) -> Iterator[str]:
    with handle:
        reader = csv.reader(handle)
        try:
            for row in reader:
                if not row:
                    raise InputError(
                        code=InputErrorCode.EMPTY_RECORD.value,
                        message=f"Empty record at line {reader.line_num} of {path}",
                        details={"path": str(path), "line": reader.line_num},
                    )
                if not row[0]:
                    raise InputError(
                        code=InputErrorCode.MALFORMED_RECORD.value,
                        message=f"Missing domain at line {reader.line_num} of {path}",
                        details={"path": str(path), "line": reader.line_num},
                    )
                yield row[0]
        except csv.Error as e:
            raise InputError(
                code=InputErrorCode.MALFORMED_RECORD.value,
                message=f"Invalid CSV at line {reader.line_num} of {path}",
                details={"path": str(path), "line": reader.line_num},
            ) from e
        except UnicodeDecodeError as e:
            raise InputError(
                code=InputErrorCode.READ_FAILED.value,
                message=f"Input file is not valid UTF-8: {path}",
                details={"path": str(path)},
            ) from e


class CsvDomainSink:
    """
    Headerless one-column CSV output.

    The file is created (or truncated) on construction so an unwritable path
    fails before the batch starts. Domains are buffered as they arrive and
    written in one go by flush(). Leaving the context with an exception
    discards the buffer, so a failed run leaves an empty file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._buffer: list[str] = []
        try:
            self._handle: Optional[TextIO] = open(
                path, "w", encoding="utf-8", newline=""
            )
        except OSError as e:
            raise OutputError(
                code=OutputErrorCode.WRITE_FAILED.value,
                message=f"Unable to create output file: {path}",
                details={"path": str(path)},
            ) from e

    def __enter__(self) -> "CsvDomainSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.flush()
        self.close()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def domains(self) -> list[str]:
        """Domains buffered so far."""
        return list(self._buffer)

    def write_domain(self, domain: str) -> None:
        self._buffer.append(domain)

    def flush(self) -> None:
        """Write every buffered domain to disk."""
        if self._handle is None:
            raise OutputError(
                code=OutputErrorCode.WRITE_FAILED.value,
                message=f"Output file already closed: {self._path}",
                details={"path": str(self._path)},
            )
        try:
            writer = csv.writer(self._handle)
            writer.writerows([domain] for domain in self._buffer)
            self._handle.flush()
        except OSError as e:
            raise OutputError(
                code=OutputErrorCode.WRITE_FAILED.value,
                message=f"Unable to write output file: {self._path}",
                details={"path": str(self._path)},
            ) from e
        self._buffer.clear()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def write_scores(path: Path, scored: Iterable[ScoredDomain]) -> None:
    """
    Write ranked domains with a 'domain,score' header.

    Raises:
        OutputError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["domain", "score"])
            for entry in scored:
                writer.writerow([entry.domain, entry.score])
    except OSError as e:
        raise OutputError(
            code=OutputErrorCode.WRITE_FAILED.value,
            message=f"Unable to write output file: {path}",
            details={"path": str(path)},
        ) from e
