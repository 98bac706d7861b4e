#!filepath: tests/base_test/test_filesystem.py
import os

from fmconvert.utils.filesystem import FileSystem


def test_ensure_dir(tmp_path):
    """测试 ensure_dir 是否能正确创建多级目录"""
    new_dir = tmp_path / "a" / "b"
    assert not new_dir.exists()

    FileSystem.ensure_dir(new_dir)
    assert new_dir.is_dir()


def test_get_file_size(tmp_path):
    f = tmp_path / "file.bin"
    f.write_bytes(b"hello world")

    assert FileSystem.get_file_size(f) == 11
    assert FileSystem.get_file_size(tmp_path / "missing") == 0


def test_fingerprint_tracks_size_and_mtime(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("1 1:1\n")
    fp = FileSystem.fingerprint(f)

    assert fp[0] == 6
    assert FileSystem.fingerprint(f) == fp

    st = os.stat(f)
    os.utime(f, ns=(st.st_atime_ns, st.st_mtime_ns + 1_000_000_000))
    assert FileSystem.fingerprint(f) != fp


def test_format_size():
    assert FileSystem.format_size(512) == "512.00 B"
    assert FileSystem.format_size(2048) == "2.00 KB"


def test_remove_file_only_touches_regular_files(tmp_path):
    f = tmp_path / "x.bin"
    f.write_bytes(b"1")
    d = tmp_path / "d"
    d.mkdir()
    (d / "keep.txt").write_text("keep")

    assert FileSystem.remove_file(f) is True
    assert FileSystem.remove_file(d) is False
    assert FileSystem.remove_file(tmp_path / "never") is False

    assert not f.exists()
    assert (d / "keep.txt").read_text() == "keep"
