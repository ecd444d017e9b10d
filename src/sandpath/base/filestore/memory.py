"""
MemoryFileStore — FileStore без диска.

Назначение:
- подставлять в Path в тестах вместо LocalFileStore
- держать то же поведение ошибок, что и у ОС (FileNotFoundError, NotADirectoryError, ...)

Пути — POSIX, относительные пути считаются от "/".
"""

from __future__ import annotations

import io
import mmap
import posixpath
import time
from dataclasses import dataclass, field
from typing import BinaryIO

from sandpath.base.errors import DirectoryResolutionError
from sandpath.base.filestore.base import FileStore
from sandpath.base.filestore.local import SANDBOX_LAYOUT
from sandpath.base.filestore.types import FileStat, ListEntry, ReadOptions, WellKnownDirectory


@dataclass
class _Node:
    is_dir: bool
    data: bytes = b""
    mtime: float = field(default_factory=time.time)
    excluded_from_backup: bool = False


class _WriteBuffer(io.BytesIO):
    """Буфер, который при закрытии сохраняет содержимое в store."""

    def __init__(self, store: "MemoryFileStore", path: str):
        super().__init__()
        self._store = store
        self._path = path

    def close(self) -> None:
        if not self.closed:
            self._store._put_file(self._path, self.getvalue())
        super().close()


class MemoryFileStore(FileStore):
    """Файловая система в словаре: путь -> узел."""

    def __init__(self, sandbox: str = "/sandbox"):
        self._sandbox = self._norm(sandbox)
        self._nodes: dict[str, _Node] = {"/": _Node(is_dir=True)}

    @staticmethod
    def _norm(path: str) -> str:
        p = str(path).replace("\\", "/")
        if not p.startswith("/"):
            p = "/" + p
        return posixpath.normpath(p).replace("//", "/")

    def _node(self, path: str) -> _Node:
        p = self._norm(path)
        node = self._nodes.get(p)
        if node is None:
            raise FileNotFoundError(2, "No such file or directory", p)
        return node

    def _put_file(self, path: str, data: bytes) -> None:
        p = self._norm(path)
        existing = self._nodes.get(p)
        if existing is not None and existing.is_dir:
            raise IsADirectoryError(21, "Is a directory", p)
        self.makedirs(posixpath.dirname(p))
        self._nodes[p] = _Node(is_dir=False, data=bytes(data))

    # --- Потоки ---

    def open_read(self, path: str) -> BinaryIO:
        node = self._node(path)
        if node.is_dir:
            raise IsADirectoryError(21, "Is a directory", self._norm(path))
        return io.BytesIO(node.data)

    def open_write(self, path: str) -> BinaryIO:
        p = self._norm(path)
        node = self._nodes.get(p)
        if node is not None and node.is_dir:
            raise IsADirectoryError(21, "Is a directory", p)
        return _WriteBuffer(self, p)

    # --- Базовые операции ---

    def stat(self, path: str) -> FileStat:
        node = self._node(path)
        name = posixpath.basename(self._norm(path))
        return FileStat(
            path=str(path),
            is_file=not node.is_dir,
            is_dir=node.is_dir,
            size=0 if node.is_dir else len(node.data),
            mtime=node.mtime,
            mode=0o755 if node.is_dir else 0o644,
            hidden=name.startswith("."),
        )

    def listdir(self, path: str, skip_hidden: bool = False) -> list[ListEntry]:
        p = self._norm(path)
        node = self._node(p)
        if not node.is_dir:
            raise NotADirectoryError(20, "Not a directory", p)
        out: list[ListEntry] = []
        for key, child in self._nodes.items():
            if key != p and posixpath.dirname(key) == p:
                name = posixpath.basename(key)
                if skip_hidden and name.startswith("."):
                    continue
                out.append(ListEntry(name, child.is_dir))
        return out

    def makedirs(self, path: str) -> None:
        p = self._norm(path)
        parts = [x for x in p.split("/") if x]
        cur = "/"
        for part in parts:
            cur = posixpath.join(cur, part)
            node = self._nodes.get(cur)
            if node is None:
                self._nodes[cur] = _Node(is_dir=True)
            elif not node.is_dir:
                raise FileExistsError(17, "File exists", cur)

    def remove_item(self, path: str) -> None:
        p = self._norm(path)
        node = self._node(p)
        if p == "/":
            raise PermissionError(1, "Operation not permitted", p)
        if node.is_dir:
            prefix = p + "/"
            for key in [k for k in self._nodes if k.startswith(prefix)]:
                del self._nodes[key]
        del self._nodes[p]

    def read_bytes(self, path: str, options: ReadOptions = ReadOptions.NONE) -> bytes | mmap.mmap:
        # Отображения в память здесь нет: данные и так в памяти.
        with self.open_read(path) as f:
            return f.read()

    # --- Песочница ---

    def resolve_directory(self, kind: WellKnownDirectory, create: bool = False) -> str:
        target = posixpath.join(self._sandbox, SANDBOX_LAYOUT[kind])
        if create:
            try:
                self.makedirs(target)
            except OSError as e:
                raise DirectoryResolutionError(str(e), kind, path=target) from e
        return target

    def exclude_from_backup(self, path: str) -> None:
        node = self._node(path)
        if not node.is_dir:
            raise NotADirectoryError(20, "Not a directory", self._norm(path))
        node.excluded_from_backup = True

    def is_excluded_from_backup(self, path: str) -> bool | None:
        node = self._node(path)
        return node.excluded_from_backup if node.is_dir else None
