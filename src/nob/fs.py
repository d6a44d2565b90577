"""Filesystem helpers: directories, whole-file I/O and recursive copies."""

from __future__ import annotations

import os
import stat
from enum import Enum
from typing import Optional

from . import log
from .arena import TempArena
from .containers import DA_INIT_CAP, FilePaths, StringBuilder
from .host import CommandArg

COPY_BUFFER_SIZE = 32 * 1024


class FileType(Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


def _reason(e: OSError) -> str:
    return e.strerror or str(e)


def mkdir_if_not_exists(path: CommandArg) -> bool:
    try:
        os.mkdir(path, 0o755)
    except FileExistsError:
        log.info(f"Directory `{path}` already exists")
        return True
    except OSError as e:
        log.error(f"Could not create directory `{path}`: {_reason(e)}")
        return False
    log.info(f"Created directory `{path}`")
    return True


def get_file_type(path: CommandArg) -> Optional[FileType]:
    """Classify ``path`` without following symlinks; None on error (logged)."""

    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        log.error(f"Could not get stat of `{path}`: {_reason(e)}")
        return None

    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISREG(mode):
        return FileType.REGULAR
    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    return FileType.OTHER


def copy_file(src_path: CommandArg, dst_path: CommandArg) -> bool:
    """Stream ``src_path`` into ``dst_path``, keeping the permission bits."""

    if log.is_verbose():
        log.info(f"Copying `{src_path}` -> `{dst_path}`")

    src_fd = -1
    dst_fd = -1
    try:
        try:
            src_fd = os.open(src_path, os.O_RDONLY | getattr(os, "O_BINARY", 0))
        except OSError as e:
            log.error(f"Could not open file `{src_path}`: {_reason(e)}")
            return False

        try:
            src_mode = stat.S_IMODE(os.fstat(src_fd).st_mode)
        except OSError as e:
            log.error(f"Could not get mode of file `{src_path}`: {_reason(e)}")
            return False

        try:
            dst_fd = os.open(
                dst_path,
                os.O_CREAT | os.O_TRUNC | os.O_WRONLY | getattr(os, "O_BINARY", 0),
                src_mode,
            )
        except OSError as e:
            log.error(f"Could not create file `{dst_path}`: {_reason(e)}")
            return False

        while True:
            try:
                chunk = os.read(src_fd, COPY_BUFFER_SIZE)
            except OSError as e:
                log.error(f"Could not read from file `{src_path}`: {_reason(e)}")
                return False
            if not chunk:
                break
            view = memoryview(chunk)
            while view:
                try:
                    written = os.write(dst_fd, view)
                except OSError as e:
                    log.error(f"Could not write to file `{dst_path}`: {_reason(e)}")
                    return False
                view = view[written:]
        return True
    finally:
        if src_fd >= 0:
            os.close(src_fd)
        if dst_fd >= 0:
            os.close(dst_fd)


def read_entire_dir(parent: CommandArg, children: FilePaths, arena: Optional[TempArena] = None) -> bool:
    """Append the names in ``parent`` to ``children``.

    Names are copied into ``arena`` when one is given, so the caller can
    release them with a rewind.
    """

    try:
        with os.scandir(parent) as it:
            for entry in it:
                children.append(arena.strdup(entry.name) if arena is not None else entry.name)
    except OSError as e:
        log.error(f"Could not read directory `{parent}`: {_reason(e)}")
        return False
    return True


def copy_directory_recursively(
    src_path: CommandArg,
    dst_path: CommandArg,
    arena: Optional[TempArena] = None,
    *,
    init_cap: int = DA_INIT_CAP,
) -> bool:
    """Copy a file or directory tree; symlinks are skipped with a warning."""

    if arena is None:
        arena = TempArena()
    checkpoint = arena.save()
    children = FilePaths(init_cap=init_cap)
    try:
        file_type = get_file_type(src_path)
        if file_type is None:
            return False

        if file_type is FileType.DIRECTORY:
            if not mkdir_if_not_exists(dst_path):
                return False
            if not read_entire_dir(src_path, children):
                return False
            for name in children:
                if name in (".", ".."):
                    continue
                src_child = arena.sprintf("%s/%s", os.fspath(src_path), name)
                dst_child = arena.sprintf("%s/%s", os.fspath(dst_path), name)
                copied = copy_directory_recursively(src_child, dst_child, arena, init_cap=init_cap)
                arena.rewind(checkpoint)
                if not copied:
                    return False
            return True

        if file_type is FileType.REGULAR:
            return copy_file(src_path, dst_path)

        if file_type is FileType.SYMLINK:
            log.warning(f"Copying symlinks is not supported yet: `{src_path}`")
            return True

        log.error(f"Unsupported type of file `{src_path}`")
        return False
    finally:
        arena.rewind(checkpoint)
        children.free()


def write_entire_file(path: CommandArg, data: bytes | bytearray | memoryview) -> bool:
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        log.error(f"Could not write into file `{path}`: {_reason(e)}")
        return False
    return True


def read_entire_file(path: CommandArg, sb: StringBuilder) -> bool:
    """Append the contents of ``path`` to ``sb``."""

    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        log.error(f"Could not read `{path}`: {_reason(e)}")
        return False
    sb.append_buf(data)
    return True


__all__ = [
    "COPY_BUFFER_SIZE",
    "FileType",
    "copy_directory_recursively",
    "copy_file",
    "get_file_type",
    "mkdir_if_not_exists",
    "read_entire_dir",
    "read_entire_file",
    "write_entire_file",
]
