import errno
import os

import pytest

from fenris.file_operations import (
    FileInfo,
    FileOperationError,
    FileOperationResult,
    append_file,
    change_directory,
    copy_file,
    create_directories,
    create_directory,
    create_file,
    delete_directory,
    delete_file,
    file_exists,
    file_operation_result_to_string,
    get_current_directory,
    get_file_info,
    get_file_size,
    list_directory,
    os_error_to_result,
    read_file,
    rename_path,
    write_file,
)


def _failure(func, *args):
    """Call func, expect a FileOperationError and return its result code."""
    with pytest.raises(FileOperationError) as info:
        func(*args)
    return info.value.result


@pytest.mark.parametrize(
    "result, text",
    [
        (FileOperationResult.SUCCESS, "success"),
        (FileOperationResult.FILE_NOT_FOUND, "file not found"),
        (FileOperationResult.PERMISSION_DENIED, "permission denied"),
        (FileOperationResult.PATH_NOT_EXIST, "path does not exist"),
        (FileOperationResult.FILE_ALREADY_EXISTS, "file already exists"),
        (FileOperationResult.DIRECTORY_NOT_EMPTY, "directory not empty"),
        (FileOperationResult.IO_ERROR, "i/o error"),
        (FileOperationResult.INVALID_PATH, "invalid path"),
        (FileOperationResult.DIRECTORY_ALREADY_EXISTS, "directory already exists"),
        (FileOperationResult.UNKNOWN_ERROR, "unknown error"),
    ],
)
def test_result_to_string(result, text):
    assert file_operation_result_to_string(result) == text


@pytest.mark.parametrize(
    "code, result",
    [
        (errno.ENOENT, FileOperationResult.FILE_NOT_FOUND),
        (errno.EACCES, FileOperationResult.PERMISSION_DENIED),
        (errno.EEXIST, FileOperationResult.FILE_ALREADY_EXISTS),
        (errno.ENOTEMPTY, FileOperationResult.DIRECTORY_NOT_EMPTY),
        (errno.EINVAL, FileOperationResult.INVALID_PATH),
        (errno.ENAMETOOLONG, FileOperationResult.INVALID_PATH),
        (errno.EIO, FileOperationResult.IO_ERROR),
        (errno.EISDIR, FileOperationResult.UNKNOWN_ERROR),
    ],
)
def test_os_error_to_result(code, result):
    assert os_error_to_result(OSError(code, "x")) is result


def test_os_error_none_is_success():
    assert os_error_to_result(None) is FileOperationResult.SUCCESS


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "a.bin"
    payload = bytes(range(256))
    write_file(path, payload)
    assert read_file(path) == payload


def test_write_str_is_utf8(tmp_path):
    path = tmp_path / "a.txt"
    write_file(path, "hello")
    assert read_file(path) == b"hello"


def test_write_truncates(tmp_path):
    path = tmp_path / "a.txt"
    write_file(path, b"long content here")
    write_file(path, b"short")
    assert read_file(path) == b"short"


def test_read_missing(tmp_path):
    with pytest.raises(FileOperationError) as info:
        read_file(tmp_path / "nope")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_write_read_only_file(tmp_path):
    path = tmp_path / "ro.txt"
    write_file(path, b"data")
    os.chmod(path, 0o444)
    try:
        assert _failure(write_file, path, b"x") is FileOperationResult.PERMISSION_DENIED
        assert _failure(append_file, path, b"x") is FileOperationResult.PERMISSION_DENIED
    finally:
        os.chmod(path, 0o644)
    assert read_file(path) == b"data"


def test_write_into_read_only_dir(tmp_path):
    directory = tmp_path / "ro"
    directory.mkdir()
    os.chmod(directory, 0o555)
    try:
        assert (
            _failure(write_file, directory / "f", b"x")
            is FileOperationResult.PERMISSION_DENIED
        )
        assert (
            _failure(create_file, directory / "f")
            is FileOperationResult.PERMISSION_DENIED
        )
    finally:
        os.chmod(directory, 0o755)
    assert not file_exists(directory / "f")


def test_append(tmp_path):
    path = tmp_path / "a.txt"
    write_file(path, b"one")
    append_file(path, b"two")
    append_file(path, "three")
    assert read_file(path) == b"onetwothree"


def test_append_missing(tmp_path):
    assert (
        _failure(append_file, tmp_path / "x", b"a")
        is FileOperationResult.FILE_NOT_FOUND
    )
    assert not file_exists(tmp_path / "x")


def test_create_file(tmp_path):
    path = tmp_path / "new.txt"
    create_file(path)
    assert file_exists(path)
    assert read_file(path) == b""
    assert _failure(create_file, path) is FileOperationResult.FILE_ALREADY_EXISTS


def test_create_file_missing_parent(tmp_path):
    with pytest.raises(FileOperationError) as info:
        create_file(tmp_path / "no" / "f")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_delete_file(tmp_path):
    path = tmp_path / "f"
    create_file(path)
    delete_file(path)
    assert not file_exists(path)
    assert _failure(delete_file, path) is FileOperationResult.FILE_NOT_FOUND


def test_delete_file_on_directory(tmp_path):
    assert _failure(delete_file, tmp_path) is FileOperationResult.INVALID_PATH
    assert file_exists(tmp_path)


def test_get_file_info_regular(tmp_path):
    path = tmp_path / "info.txt"
    write_file(path, b"12345")
    os.chmod(path, 0o640)
    os.utime(path, (1_000_000, 1_000_000))
    info = get_file_info(path)
    assert info == FileInfo(
        name=str(path), size=5, is_directory=False, modified_time=1_000_000, permissions=0o640
    )


def test_get_file_info_directory(tmp_path):
    info = get_file_info(tmp_path)
    assert info.is_directory
    assert info.size == 0


def test_get_file_info_missing(tmp_path):
    with pytest.raises(FileOperationError) as info:
        get_file_info(tmp_path / "x")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_directory(tmp_path):
    path = tmp_path / "d"
    create_directory(path)
    assert path.is_dir()
    assert (
        _failure(create_directory, path)
        is FileOperationResult.DIRECTORY_ALREADY_EXISTS
    )


def test_create_directory_over_file(tmp_path):
    path = tmp_path / "f"
    create_file(path)
    assert _failure(create_directory, path) is FileOperationResult.INVALID_PATH
    assert not path.is_dir()


def test_create_directory_missing_parent(tmp_path):
    with pytest.raises(FileOperationError) as info:
        create_directory(tmp_path / "a" / "b")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_directories(tmp_path):
    path = tmp_path / "a" / "b" / "c"
    create_directories(path)
    assert path.is_dir()
    create_directories(path)
    assert path.is_dir()


def test_delete_directory_non_recursive(tmp_path):
    path = tmp_path / "d"
    create_directory(path)
    create_file(path / "f")
    assert (
        _failure(delete_directory, path) is FileOperationResult.DIRECTORY_NOT_EMPTY
    )
    delete_file(path / "f")
    delete_directory(path)
    assert not file_exists(path)


def test_delete_directory_recursive(tmp_path):
    path = tmp_path / "d"
    create_directories(path / "x" / "y")
    write_file(path / "x" / "f", b"data")
    delete_directory(path, True)
    assert not file_exists(path)


def test_delete_directory_errors(tmp_path):
    assert (
        _failure(delete_directory, tmp_path / "nope")
        is FileOperationResult.FILE_NOT_FOUND
    )
    create_file(tmp_path / "f")
    assert (
        _failure(delete_directory, tmp_path / "f") is FileOperationResult.INVALID_PATH
    )
    assert file_exists(tmp_path / "f")


def test_list_directory(tmp_path):
    write_file(tmp_path / "a.txt", b"abc")
    create_directory(tmp_path / "sub")
    entries = {entry.name: entry for entry in list_directory(tmp_path)}
    assert set(entries) == {str(tmp_path / "a.txt"), str(tmp_path / "sub")}
    assert entries[str(tmp_path / "a.txt")].size == 3
    assert entries[str(tmp_path / "sub")].is_directory


def test_list_empty_directory(tmp_path):
    assert list_directory(tmp_path) == []


def test_list_directory_errors(tmp_path):
    assert (
        _failure(list_directory, tmp_path / "no") is FileOperationResult.FILE_NOT_FOUND
    )
    create_file(tmp_path / "f")
    assert (
        _failure(list_directory, tmp_path / "f") is FileOperationResult.INVALID_PATH
    )


def test_change_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    create_directory(target)
    change_directory(target)
    current = get_current_directory()
    assert str(current) == os.path.realpath(target)


def test_change_directory_errors(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert (
        _failure(change_directory, tmp_path / "no")
        is FileOperationResult.FILE_NOT_FOUND
    )
    create_file(tmp_path / "f")
    assert (
        _failure(change_directory, tmp_path / "f") is FileOperationResult.INVALID_PATH
    )
    current = get_current_directory()
    assert str(current) == os.path.realpath(tmp_path)


def test_rename_path(tmp_path):
    old = tmp_path / "old"
    new = tmp_path / "new"
    write_file(old, b"data")
    rename_path(old, new)
    assert not file_exists(old)
    assert read_file(new) == b"data"


def test_rename_path_errors(tmp_path):
    assert (
        _failure(rename_path, tmp_path / "a", tmp_path / "b")
        is FileOperationResult.FILE_NOT_FOUND
    )
    create_file(tmp_path / "a")
    create_file(tmp_path / "b")
    assert (
        _failure(rename_path, tmp_path / "a", tmp_path / "b")
        is FileOperationResult.FILE_ALREADY_EXISTS
    )


def test_copy_file_overwrites(tmp_path):
    write_file(tmp_path / "src", b"source")
    write_file(tmp_path / "dst", b"old destination")
    copy_file(tmp_path / "src", tmp_path / "dst")
    assert read_file(tmp_path / "dst") == b"source"
    assert read_file(tmp_path / "src") == b"source"


def test_copy_file_errors(tmp_path):
    assert (
        _failure(copy_file, tmp_path / "no", tmp_path / "d")
        is FileOperationResult.FILE_NOT_FOUND
    )
    assert (
        _failure(copy_file, tmp_path, tmp_path / "d")
        is FileOperationResult.FILE_NOT_FOUND
    )
    assert not file_exists(tmp_path / "d")


def test_get_file_size(tmp_path):
    write_file(tmp_path / "f", b"x" * 1000)
    assert get_file_size(tmp_path / "f") == 1000
    assert (
        _failure(get_file_size, tmp_path / "no") is FileOperationResult.FILE_NOT_FOUND
    )
    assert _failure(get_file_size, tmp_path) is FileOperationResult.INVALID_PATH


def test_file_exists(tmp_path):
    assert file_exists(tmp_path)
    assert not file_exists(tmp_path / "missing")


def test_error_message_names_path(tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(FileOperationError) as info:
        read_file(missing)
    assert str(info.value) == f"file not found: {missing}"