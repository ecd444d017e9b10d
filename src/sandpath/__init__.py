"""
sandpath — пути и стандартные каталоги приложения поверх FileStore.

Рекомендованный импорт:
    from sandpath import Path
"""

from sandpath.base.errors import DirectoryResolutionError, FilesystemError
from sandpath.base.filestore import (
    FileAttribute,
    FileExistence,
    FileStat,
    FileStore,
    LocalFileStore,
    MemoryFileStore,
    ReadOptions,
    WellKnownDirectory,
)
from sandpath.common.size import string_from_bytes
from sandpath.path import Path

__all__ = [
    "Path",
    "FileStore",
    "LocalFileStore",
    "MemoryFileStore",
    "FileStat",
    "FileAttribute",
    "FileExistence",
    "ReadOptions",
    "WellKnownDirectory",
    "FilesystemError",
    "DirectoryResolutionError",
    "string_from_bytes",
]
