from sandpath.base.filestore.base import FileStore, join
from sandpath.base.filestore.local import LocalFileStore
from sandpath.base.filestore.memory import MemoryFileStore
from sandpath.base.filestore.types import (
    FileAttribute,
    FileExistence,
    FileStat,
    ListEntry,
    ReadOptions,
    WellKnownDirectory,
)

__all__ = [
    "FileStore",
    "LocalFileStore",
    "MemoryFileStore",
    "FileStat",
    "FileAttribute",
    "FileExistence",
    "ListEntry",
    "ReadOptions",
    "WellKnownDirectory",
    "join",
]
