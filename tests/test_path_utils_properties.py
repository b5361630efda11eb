"""
Property-based tests for path normalization and scan root validation.
"""

from pathlib import Path, PurePosixPath, PureWindowsPath

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kushn.core.path_utils import (
    normalize_pattern_path,
    to_relative_posix,
    validate_scan_root,
)

segment = st.from_regex(r"[A-Za-z0-9_][A-Za-z0-9_.\-]{0,8}", fullmatch=True).filter(
    lambda s: s not in (".", "..")
)

segments = st.lists(segment, min_size=1, max_size=5)


@given(parts=segments)
@settings(max_examples=100)
def test_windows_and_posix_relative_paths_agree(parts):
    """The same relative path gives the same string on either platform."""
    posix = to_relative_posix(PurePosixPath("/root", *parts), PurePosixPath("/root"))
    windows = to_relative_posix(PureWindowsPath("C:\\root", *parts), PureWindowsPath("C:\\root"))

    assert posix == windows == "/".join(parts)


@given(parts=segments, sep=st.sampled_from(["/", "\\", "//", "/./"]))
@settings(max_examples=100)
def test_pattern_normalization_canonicalizes_separators(parts, sep):
    assert normalize_pattern_path(sep.join(parts)) == "/".join(parts)


@given(parts=segments)
@settings(max_examples=50)
def test_pattern_normalization_keeps_anchor_and_trailing_slash(parts):
    joined = "/".join(parts)

    assert normalize_pattern_path(f"/{joined}/") == f"/{joined}/"
    assert normalize_pattern_path(f"\\{joined}\\") == f"/{joined}/"


def test_validate_scan_root(tmp_path):
    file_path = tmp_path / "a.txt"
    file_path.write_text("x", encoding="utf-8")

    assert validate_scan_root(tmp_path).valid
    assert validate_scan_root(str(tmp_path)).valid

    missing = validate_scan_root(tmp_path / "missing")
    assert not missing.valid
    assert "does not exist" in missing.error_message

    not_dir = validate_scan_root(file_path)
    assert not not_dir.valid
    assert "not a directory" in not_dir.error_message


def test_relative_path_outside_root_raises(tmp_path):
    with pytest.raises(ValueError):
        to_relative_posix(Path("/elsewhere/file.txt"), tmp_path)
