"""Reading, writing and listing of component files on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass

DirFilesMap = dict[str, list[str]]

_FILE_MODE = 0o644


@dataclass(frozen=True)
class RawFile:
    """The contents of a file together with the path it was read from."""

    path: str
    data: bytes


def _walk(root: str, directory: str, dir_map: DirFilesMap) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        path = os.path.join(directory, entry.name)
        if entry.is_dir(follow_symlinks=False):
            _walk(root, path, dir_map)
            continue
        relative = os.path.relpath(path, root)
        key = os.path.dirname(relative) or "."
        dir_map.setdefault(key, []).append(path)


class FileHandler:
    """Reads and writes files and maps directory trees."""

    def read_file(self, path: str) -> RawFile:
        """Read the whole file at ``path``."""
        with open(path, "rb") as handle:
            return RawFile(path=path, data=handle.read())

    def get_dir_map(self, root: str) -> DirFilesMap:
        """Map each directory below ``root`` (relative to it) to the files it holds.

        Directories are walked in lexical order without following symbolic
        links; directories holding no files do not appear.
        """
        root = os.fspath(root)
        info = os.lstat(root)
        dir_map: DirFilesMap = {}
        if os.path.stat.S_ISDIR(info.st_mode):
            _walk(root, root, dir_map)
        else:
            dir_map["."] = [root]
        return dir_map

    def write(self, data: bytes, path: str) -> None:
        """Write ``data`` to ``path``, creating it with mode 0644 or truncating it."""
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        fd = os.open(path, flags, _FILE_MODE)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)