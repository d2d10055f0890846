"""
Property-based tests for exhaustive candidate generation.
"""

import tempfile
import zipfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domain_sifter.exceptions import ValidationError
from domain_sifter.generator import (
    count_domains,
    generate_domains,
    label_for_index,
    normalize_tlds,
    write_domain_archive,
)


def tlds_strategy() -> st.SearchStrategy[list[str]]:
    return st.lists(
        st.sampled_from(["com", "fr", "net", "io", "co.uk"]),
        min_size=1,
        max_size=3,
        unique=True,
    )


class TestGeneration:
    """
    Every label of the requested length is combined with every TLD.
    """

    @given(length=st.integers(min_value=1, max_value=2), tlds=tlds_strategy())
    @settings(max_examples=30)
    def test_exhaustive_and_unique(self, length: int, tlds: list[str]) -> None:
        """
        *For any* length and TLD list, generate_domains SHALL yield
        26^length * len(tlds) distinct domains.
        """
        domains = list(generate_domains(length, tlds))
        assert len(domains) == count_domains(length, tlds) == 26 ** length * len(tlds)
        assert len(set(domains)) == len(domains)
        assert all(len(d.split(".", 1)[0]) == length for d in domains)

    def test_order(self) -> None:
        domains = list(generate_domains(2, ["com", ".fr"]))
        assert domains[:4] == ["aa.com", "aa.fr", "ab.com", "ab.fr"]
        assert domains[-1] == "zz.fr"

    @given(index=st.integers(min_value=0, max_value=26 ** 3 - 1))
    def test_label_is_base26(self, index: int) -> None:
        label = label_for_index(index, 3)
        value = 0
        for char in label:
            value = value * 26 + (ord(char) - ord("a"))
        assert value == index

    def test_normalize_tlds(self) -> None:
        assert normalize_tlds([" .com ", "", "fr", "  "]) == ["com", "fr"]

    @pytest.mark.parametrize("length", [0, 7, -1])
    def test_invalid_length(self, length: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            list(generate_domains(length, ["com"]))
        assert exc_info.value.code == "invalid_length"

    def test_no_tlds(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            list(generate_domains(1, [" ", ""]))
        assert exc_info.value.code == "no_tlds"


class TestArchive:
    """
    Archives split the domain list into chunks of at most max_rows_per_file.
    """

    @given(
        tlds=tlds_strategy(),
        max_rows=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=30, deadline=None)
    def test_chunks(self, tlds: list[str], max_rows: int) -> None:
        """
        *For any* chunk size, the archive SHALL contain every domain exactly
        once, in order, with no member larger than the chunk size.
        """
        progress: list[tuple[int, int, int]] = []

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "domains.zip"
            written = write_domain_archive(
                path, 1, tlds, max_rows_per_file=max_rows,
                progress=lambda index, done, total: progress.append((index, done, total)),
            )

            with zipfile.ZipFile(path) as archive:
                names = archive.namelist()
                rows = [archive.read(name).decode().split("\n") for name in names]

        total = 26 * len(tlds)
        expected_files = -(-total // max_rows)
        assert written == total
        assert names == [f"domains_part_{i}.csv" for i in range(1, expected_files + 1)]
        assert all(len(chunk) <= max_rows for chunk in rows)
        assert [d for chunk in rows for d in chunk] == list(generate_domains(1, tlds))
        assert [index for index, _, _ in progress] == list(range(1, expected_files + 1))
        assert progress[-1] == (expected_files, total, total)
        assert all(done == min(index * max_rows, total) for index, done, _ in progress)

    def test_invalid_chunk_size(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError) as exc_info:
            write_domain_archive(tmp_path / "x.zip", 1, ["com"], max_rows_per_file=0)
        assert exc_info.value.code == "invalid_chunk_size"
