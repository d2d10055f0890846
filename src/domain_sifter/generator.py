"""
Exhaustive candidate generation.

Produces every lowercase label of a given length for a list of TLDs and
packs the result into a zip archive of CSV chunks, ready to feed to the
checkers and the scorer.
"""

import string
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Callable, Optional

from .enums import OutputErrorCode
from .exceptions import OutputError, ValidationError


ALPHABET = string.ascii_lowercase
MIN_LENGTH = 1
MAX_LENGTH = 6
DEFAULT_MAX_ROWS_PER_FILE = 50000
CHUNK_NAME = "domains_part_{index}.csv"

ProgressCallback = Callable[[int, int, int], None]


def normalize_tlds(tlds: Iterable[str]) -> list[str]:
    """Trim whitespace and a leading dot; drop empty entries."""
    cleaned = []
    for tld in tlds:
        tld = tld.strip().lstrip(".")
        if tld:
            cleaned.append(tld)
    return cleaned


def validate_parameters(length: int, tlds: list[str]) -> None:
    """
    Raises:
        ValidationError: If length is outside 1..6 or no TLD is given
    """
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise ValidationError(
            code="invalid_length",
            message=f"Length must be between {MIN_LENGTH} and {MAX_LENGTH}, got {length}",
            details={"length": length},
        )
    if not tlds:
        raise ValidationError(
            code="no_tlds",
            message="At least one TLD is required",
        )


def label_for_index(index: int, length: int) -> str:
    """Base-26 rendering of index, left-padded with 'a' to length."""
    chars = []
    for _ in range(length):
        index, remainder = divmod(index, len(ALPHABET))
        chars.append(ALPHABET[remainder])
    return "".join(reversed(chars))


def count_domains(length: int, tlds: list[str]) -> int:
    return len(ALPHABET) ** length * len(tlds)


def generate_domains(length: int, tlds: Iterable[str]) -> Iterator[str]:
    """
    Yield every label of the given length combined with every TLD.

    Labels come in counting order ('aa', 'ab', ... 'zz'); for each label the
    TLDs are emitted in the order given.
    """
    tlds = normalize_tlds(tlds)
    validate_parameters(length, tlds)

    for index in range(len(ALPHABET) ** length):
        label = label_for_index(index, length)
        for tld in tlds:
            yield f"{label}.{tld}"


def write_domain_archive(
    path: Path,
    length: int,
    tlds: Iterable[str],
    max_rows_per_file: int = DEFAULT_MAX_ROWS_PER_FILE,
    progress: Optional[ProgressCallback] = None,
) -> int:
    """
    Write all generated domains into a zip of CSV chunks.

    Each member 'domains_part_<n>.csv' holds at most max_rows_per_file
    newline-separated domains.

    Args:
        path: Archive to create
        length: Label length (1-6)
        tlds: TLDs to combine with each label
        max_rows_per_file: Chunk size
        progress: Optional callback(file_index, done, total) called after
            each chunk is written

    Returns:
        Total number of domains written

    Raises:
        ValidationError: On invalid parameters
        OutputError: If the archive cannot be written
    """
    if max_rows_per_file < 1:
        raise ValidationError(
            code="invalid_chunk_size",
            message=f"max_rows_per_file must be positive, got {max_rows_per_file}",
            details={"max_rows_per_file": max_rows_per_file},
        )

    tlds = normalize_tlds(tlds)
    validate_parameters(length, tlds)
    total = count_domains(length, tlds)

    written = 0
    chunk: list[str] = []
    file_index = 1

    try:
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for domain in generate_domains(length, tlds):
                chunk.append(domain)
                if len(chunk) == max_rows_per_file:
                    archive.writestr(CHUNK_NAME.format(index=file_index), "\n".join(chunk))
                    written += len(chunk)
                    chunk = []
                    if progress:
                        progress(file_index, written, total)
                    file_index += 1

            if chunk:
                archive.writestr(CHUNK_NAME.format(index=file_index), "\n".join(chunk))
                written += len(chunk)
                if progress:
                    progress(file_index, written, total)
    except OSError as e:
        raise OutputError(
            code=OutputErrorCode.WRITE_FAILED.value,
            message=f"Unable to write archive: {path}",
            details={"path": str(path)},
        ) from e

    return written
