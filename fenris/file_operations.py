"""File and directory operations that report failures as FileOperationError."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from dataclasses import dataclass
from enum import Enum
from typing import Union

__all__ = [
    "FileOperationResult",
    "FileOperationError",
    "FileInfo",
    "file_operation_result_to_string",
    "os_error_to_result",
    "read_file",
    "write_file",
    "append_file",
    "create_file",
    "delete_file",
    "get_file_info",
    "file_exists",
    "create_directory",
    "create_directories",
    "delete_directory",
    "list_directory",
    "change_directory",
    "get_current_directory",
    "rename_path",
    "copy_file",
    "get_file_size",
]

PathLike = Union[str, "os.PathLike[str]"]


class FileOperationResult(Enum):
    """Outcome of a file operation."""

    SUCCESS = 0
    FILE_NOT_FOUND = 1
    PERMISSION_DENIED = 2
    PATH_NOT_EXIST = 3
    FILE_ALREADY_EXISTS = 4
    DIRECTORY_NOT_EMPTY = 5
    IO_ERROR = 6
    INVALID_PATH = 7
    DIRECTORY_ALREADY_EXISTS = 8
    UNKNOWN_ERROR = 9


_DESCRIPTIONS = {
    FileOperationResult.SUCCESS: "success",
    FileOperationResult.FILE_NOT_FOUND: "file not found",
    FileOperationResult.PERMISSION_DENIED: "permission denied",
    FileOperationResult.PATH_NOT_EXIST: "path does not exist",
    FileOperationResult.FILE_ALREADY_EXISTS: "file already exists",
    FileOperationResult.DIRECTORY_NOT_EMPTY: "directory not empty",
    FileOperationResult.IO_ERROR: "i/o error",
    FileOperationResult.INVALID_PATH: "invalid path",
    FileOperationResult.DIRECTORY_ALREADY_EXISTS: "directory already exists",
    FileOperationResult.UNKNOWN_ERROR: "unknown error",
}

_ERRNO_RESULTS = {
    errno.ENOENT: FileOperationResult.FILE_NOT_FOUND,
    errno.EACCES: FileOperationResult.PERMISSION_DENIED,
    errno.EEXIST: FileOperationResult.FILE_ALREADY_EXISTS,
    errno.ENOTEMPTY: FileOperationResult.DIRECTORY_NOT_EMPTY,
    errno.EINVAL: FileOperationResult.INVALID_PATH,
    errno.ENAMETOOLONG: FileOperationResult.INVALID_PATH,
    errno.EIO: FileOperationResult.IO_ERROR,
}


def file_operation_result_to_string(result: FileOperationResult) -> str:
    """Return a human-readable description of a file operation result."""
    return _DESCRIPTIONS.get(result, "unrecognized error")


class FileOperationError(Exception):
    """Raised when a file operation fails."""

    def __init__(self, result: FileOperationResult, path: PathLike | None = None) -> None:
        message = file_operation_result_to_string(result)
        if path is not None:
            message = f"{message}: {os.fspath(path)}"
        super().__init__(message)
        self.result = result
        self.path = path


@dataclass
class FileInfo:
    """Metadata about a file or directory."""

    name: str = ""
    size: int = 0
    is_directory: bool = False
    modified_time: int = 0
    permissions: int = 0


def os_error_to_result(error: OSError | None) -> FileOperationResult:
    """Map an OSError (or None for no error) to a FileOperationResult."""
    if error is None:
        return FileOperationResult.SUCCESS
    return _ERRNO_RESULTS.get(error.errno, FileOperationResult.UNKNOWN_ERROR)


def _fail(error: OSError, path: PathLike) -> FileOperationError:
    return FileOperationError(os_error_to_result(error), path)


def _to_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _require_owner_write(path: PathLike, error_path: PathLike) -> None:
    try:
        mode = os.stat(path).st_mode
    except OSError as exc:
        raise _fail(exc, error_path) from exc
    if not mode & stat.S_IWUSR:
        raise FileOperationError(FileOperationResult.PERMISSION_DENIED, error_path)


def _open_error(exc: OSError, path: PathLike) -> FileOperationError:
    if exc.errno in (errno.EACCES, errno.EPERM):
        return FileOperationError(FileOperationResult.PERMISSION_DENIED, path)
    return FileOperationError(FileOperationResult.IO_ERROR, path)


def _parent(path: PathLike) -> str:
    return os.path.dirname(os.fspath(path))


def read_file(filepath: PathLike) -> bytes:
    """Return the whole content of a file."""
    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
    try:
        with open(filepath, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise FileOperationError(FileOperationResult.IO_ERROR, filepath) from exc


def write_file(filepath: PathLike, data: bytes | str) -> None:
    """Write ``data`` to a file, creating it or replacing its content."""
    if os.path.exists(filepath):
        _require_owner_write(filepath, filepath)
    else:
        parent = _parent(filepath)
        if parent and os.path.exists(parent):
            _require_owner_write(parent, filepath)

    try:
        with open(filepath, "wb") as handle:
            handle.write(_to_bytes(data))
    except OSError as exc:
        raise _open_error(exc, filepath) from exc


def append_file(filepath: PathLike, data: bytes | str) -> None:
    """Append ``data`` to an existing file."""
    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
    _require_owner_write(filepath, filepath)
    try:
        with open(filepath, "ab") as handle:
            handle.write(_to_bytes(data))
    except OSError as exc:
        raise _open_error(exc, filepath) from exc


def create_file(filepath: PathLike) -> None:
    """Create a new empty file; the file must not exist yet."""
    if os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_ALREADY_EXISTS, filepath)

    parent = _parent(filepath)
    if parent:
        if not os.path.exists(parent):
            raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
        _require_owner_write(parent, filepath)

    try:
        with open(filepath, "wb"):
            pass
    except OSError as exc:
        raise _open_error(exc, filepath) from exc

    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.UNKNOWN_ERROR, filepath)


def delete_file(filepath: PathLike) -> None:
    """Delete a regular file."""
    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
    if not os.path.isfile(filepath):
        raise FileOperationError(FileOperationResult.INVALID_PATH, filepath)
    try:
        os.remove(filepath)
    except OSError as exc:
        raise _fail(exc, filepath) from exc


def get_file_info(filepath: PathLike) -> FileInfo:
    """Return name, size, type, modification time and permission bits of a path."""
    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
    try:
        status = os.stat(filepath)
    except OSError as exc:
        raise _fail(exc, filepath) from exc

    is_regular = stat.S_ISREG(status.st_mode)
    return FileInfo(
        name=os.fspath(filepath),
        size=status.st_size if is_regular else 0,
        is_directory=stat.S_ISDIR(status.st_mode),
        modified_time=int(status.st_mtime),
        permissions=status.st_mode & 0o777,
    )


def file_exists(filepath: PathLike) -> bool:
    """Return True if the path exists."""
    return os.path.exists(filepath)


def create_directory(dirpath: PathLike) -> None:
    """Create a single directory whose parent must exist."""
    if os.path.exists(dirpath):
        if os.path.isdir(dirpath):
            raise FileOperationError(FileOperationResult.DIRECTORY_ALREADY_EXISTS, dirpath)
        raise FileOperationError(FileOperationResult.INVALID_PATH, dirpath)
    try:
        os.mkdir(dirpath)
    except OSError as exc:
        raise _fail(exc, dirpath) from exc


def create_directories(dirpath: PathLike) -> None:
    """Create a directory and any missing parents; an existing directory is fine."""
    if os.path.exists(dirpath) and not os.path.isdir(dirpath):
        raise FileOperationError(FileOperationResult.UNKNOWN_ERROR, dirpath)
    try:
        os.makedirs(dirpath, exist_ok=True)
    except OSError as exc:
        raise _fail(exc, dirpath) from exc


def delete_directory(dirpath: PathLike, recursive: bool = False) -> None:
    """Delete a directory; without ``recursive`` it must be empty."""
    if not os.path.exists(dirpath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, dirpath)
    if not os.path.isdir(dirpath):
        raise FileOperationError(FileOperationResult.INVALID_PATH, dirpath)
    try:
        if recursive:
            shutil.rmtree(dirpath)
        else:
            os.rmdir(dirpath)
    except OSError as exc:
        if exc.errno == errno.ENOTEMPTY:
            raise FileOperationError(
                FileOperationResult.DIRECTORY_NOT_EMPTY, dirpath
            ) from exc
        raise _fail(exc, dirpath) from exc


def list_directory(dirpath: PathLike) -> list[FileInfo]:
    """Return information about every entry of a directory."""
    if not os.path.exists(dirpath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, dirpath)
    if not os.path.isdir(dirpath):
        raise FileOperationError(FileOperationResult.INVALID_PATH, dirpath)

    try:
        names = os.listdir(dirpath)
    except OSError:
        names = []

    base = os.fspath(dirpath)
    return [get_file_info(os.path.normpath(os.path.join(base, name))) for name in names]


def change_directory(dirpath: PathLike) -> None:
    """Change the process's working directory."""
    if not os.path.exists(dirpath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, dirpath)
    if not os.path.isdir(dirpath):
        raise FileOperationError(FileOperationResult.INVALID_PATH, dirpath)
    try:
        os.chdir(dirpath)
    except OSError as exc:
        raise _fail(exc, dirpath) from exc


def get_current_directory() -> str:
    """Return the process's working directory."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise FileOperationError(os_error_to_result(exc)) from exc


def rename_path(oldpath: PathLike, newpath: PathLike) -> None:
    """Rename a file or directory; the new path must not exist."""
    if not os.path.exists(oldpath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, oldpath)
    if os.path.exists(newpath):
        raise FileOperationError(FileOperationResult.FILE_ALREADY_EXISTS, newpath)
    try:
        os.rename(oldpath, newpath)
    except OSError as exc:
        raise _fail(exc, oldpath) from exc


def copy_file(source: PathLike, destination: PathLike) -> None:
    """Copy a regular file, overwriting the destination if it exists."""
    if not os.path.isfile(source):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, source)
    try:
        shutil.copyfile(source, destination)
        shutil.copymode(source, destination)
    except OSError as exc:
        raise _fail(exc, destination) from exc


def get_file_size(filepath: PathLike) -> int:
    """Return the size in bytes of a regular file."""
    if not os.path.exists(filepath):
        raise FileOperationError(FileOperationResult.FILE_NOT_FOUND, filepath)
    if not os.path.isfile(filepath):
        raise FileOperationError(FileOperationResult.INVALID_PATH, filepath)
    try:
        return os.path.getsize(filepath)
    except OSError as exc:
        raise _fail(exc, filepath) from exc