"""
LocalFileStore — реализация FileStore для локальной файловой системы.

Используется вне контура, когда sandpath-plugin не установлен.

Требования:
- реализовать полный контракт FileStore
- работать как на Windows, так и на Linux/macOS

Замечание:
- LocalFileStore принимает POSIX-разделители ('/') в путях — pathlib это допускает.
- стандартные каталоги: либо раскладка песочницы (sandbox=...), либо
  платформенные умолчания (macOS ~/Library, XDG на Linux, %APPDATA% на Windows).
"""

from __future__ import annotations

import mmap
import os
import plistlib
import shutil
import stat as stat_mod
import sys
import tempfile
from pathlib import Path
from typing import BinaryIO

from sandpath.base.errors import DirectoryResolutionError
from sandpath.base.filestore.base import FileStore
from sandpath.base.filestore.types import FileStat, ListEntry, ReadOptions, WellKnownDirectory
from sandpath.base.utils.optional_deps import ensure_import

# Раскладка песочницы приложения относительно её корня.
SANDBOX_LAYOUT: dict[WellKnownDirectory, str] = {
    WellKnownDirectory.DOCUMENTS: "Documents",
    WellKnownDirectory.LIBRARY: "Library",
    WellKnownDirectory.CACHES: "Library/Caches",
    WellKnownDirectory.APPLICATION_SUPPORT: "Library/Application Support",
    WellKnownDirectory.TEMP: "tmp",
}

# Атрибут Time Machine; на Linux — в пространстве имён user.
# Значение — строка в бинарном plist (так его пишет tmutil addexclusion).
BACKUP_EXCLUDE_XATTR = "com.apple.metadata:com_apple_backup_excludeItem"
BACKUP_EXCLUDE_VALUE = plistlib.dumps("com.apple.backupd", fmt=plistlib.FMT_BINARY)

_UF_HIDDEN = getattr(stat_mod, "UF_HIDDEN", 0x8000)
_FILE_ATTRIBUTE_HIDDEN = getattr(stat_mod, "FILE_ATTRIBUTE_HIDDEN", 0x2)


class LocalFileStore(FileStore):
    """Локальная реализация FileStore."""

    def __init__(self, root: str | None = None, sandbox: str | None = None):
        # root используется как базовый каталог для относительных путей
        self._root = Path(root).expanduser().resolve() if root else None
        # sandbox — корень раскладки песочницы для стандартных каталогов
        self._sandbox = Path(sandbox).expanduser().resolve() if sandbox else None

    def _abs(self, path: str) -> Path:
        # Нормализация: обратные слэши приводятся к '/', pathlib на Windows это понимает.
        p = Path(str(path).replace("\\", "/"))
        if self._root and not p.is_absolute():
            p = self._root / p
        return p

    # --- Потоки ---

    def open_read(self, path: str) -> BinaryIO:
        return self._abs(path).open("rb")

    def open_write(self, path: str) -> BinaryIO:
        p = self._abs(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p.open("wb")

    # --- Базовые операции ---

    def stat(self, path: str) -> FileStat:
        p = self._abs(path)
        st = p.stat()
        is_dir = stat_mod.S_ISDIR(st.st_mode)
        return FileStat(
            path=str(path),
            is_file=not is_dir,
            is_dir=is_dir,
            size=int(st.st_size),
            mtime=float(st.st_mtime),
            atime=float(st.st_atime),
            ctime=float(st.st_ctime),
            mode=stat_mod.S_IMODE(st.st_mode),
            device=int(st.st_dev),
            inode=int(st.st_ino),
            hidden=_is_hidden(p.name, st),
        )

    def listdir(self, path: str, skip_hidden: bool = False) -> list[ListEntry]:
        out: list[ListEntry] = []
        with os.scandir(self._abs(path)) as it:
            for entry in it:
                if skip_hidden and _entry_hidden(entry):
                    continue
                out.append(ListEntry(entry.name, _entry_is_dir(entry)))
        return out

    def makedirs(self, path: str) -> None:
        self._abs(path).mkdir(parents=True, exist_ok=True)

    def remove_item(self, path: str) -> None:
        p = self._abs(path)
        if p.is_dir() and not p.is_symlink():
            shutil.rmtree(p)
        else:
            p.unlink()

    def read_bytes(self, path: str, options: ReadOptions = ReadOptions.NONE) -> bytes | mmap.mmap:
        """Читает файл целиком.

        При MAPPED_IF_SAFE/ALWAYS_MAPPED возвращает mmap.mmap (только чтение).
        Его нужно закрыть (close() или with), иначе отображение живёт до сборки мусора.
        """
        p = self._abs(path)
        with p.open("rb") as f:
            if options & ReadOptions.UNCACHED:
                _drop_cache_hint(f.fileno())
            if options.wants_mapping:
                try:
                    mm = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
                except (ValueError, OSError):
                    # пустой файл или ФС без поддержки mmap
                    if options & ReadOptions.ALWAYS_MAPPED:
                        raise
                else:
                    return mm
            return f.read()

    # --- Песочница ---

    def resolve_directory(self, kind: WellKnownDirectory, create: bool = False) -> str:
        if self._sandbox is not None:
            target = self._sandbox / SANDBOX_LAYOUT[kind]
        else:
            target = _platform_directory(kind)
        if target is None:
            raise DirectoryResolutionError("no location known for this platform", kind)
        if create:
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryResolutionError(str(e), kind, path=str(target)) from e
        return str(target)

    def exclude_from_backup(self, path: str) -> None:
        p = self._abs(path)
        if hasattr(os, "setxattr"):
            os.setxattr(p, f"user.{BACKUP_EXCLUDE_XATTR}", BACKUP_EXCLUDE_VALUE)
            return
        xattr = ensure_import("xattr", "xattr>=0.10", hint="pip install sandpath[macos]")
        xattr.setxattr(str(p), BACKUP_EXCLUDE_XATTR, BACKUP_EXCLUDE_VALUE)

    def is_excluded_from_backup(self, path: str) -> bool | None:
        return _has_backup_exclusion(self._abs(path))


def _is_hidden(name: str, st: os.stat_result) -> bool:
    if name.startswith("."):
        return True
    if getattr(st, "st_flags", 0) & _UF_HIDDEN:
        return True
    return bool(getattr(st, "st_file_attributes", 0) & _FILE_ATTRIBUTE_HIDDEN)


def _entry_is_dir(entry: os.DirEntry) -> bool | None:
    try:
        return entry.is_dir()
    except OSError:
        return None


def _entry_hidden(entry: os.DirEntry) -> bool:
    if entry.name.startswith("."):
        return True
    if sys.platform in ("darwin", "win32"):
        try:
            return _is_hidden(entry.name, entry.stat(follow_symlinks=False))
        except OSError:
            return False
    return False


def _has_backup_exclusion(p: Path) -> bool | None:
    try:
        if hasattr(os, "getxattr"):
            value = os.getxattr(p, f"user.{BACKUP_EXCLUDE_XATTR}")
        elif sys.platform == "darwin":
            xattr = ensure_import("xattr", "xattr>=0.10", hint="pip install sandpath[macos]")
            value = xattr.getxattr(str(p), BACKUP_EXCLUDE_XATTR)
        else:
            return None
    except (OSError, KeyError):
        return False
    return value == BACKUP_EXCLUDE_VALUE


def _drop_cache_hint(fd: int) -> None:
    advise = getattr(os, "posix_fadvise", None)
    if advise is None:
        return
    try:
        advise(fd, 0, 0, os.POSIX_FADV_DONTNEED)
    except OSError:
        pass


def _env_dir(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


def _platform_directory(kind: WellKnownDirectory) -> Path | None:
    """Платформенные умолчания для стандартных каталогов."""
    if kind is WellKnownDirectory.TEMP:
        return Path(tempfile.gettempdir())

    try:
        home = Path.home()
    except RuntimeError:
        return None

    if sys.platform == "darwin":
        library = home / "Library"
        return {
            WellKnownDirectory.DOCUMENTS: home / "Documents",
            WellKnownDirectory.LIBRARY: library,
            WellKnownDirectory.CACHES: library / "Caches",
            WellKnownDirectory.APPLICATION_SUPPORT: library / "Application Support",
        }[kind]

    if sys.platform == "win32":
        roaming = _env_dir("APPDATA") or home / "AppData" / "Roaming"
        local = _env_dir("LOCALAPPDATA") or home / "AppData" / "Local"
        return {
            WellKnownDirectory.DOCUMENTS: home / "Documents",
            WellKnownDirectory.LIBRARY: local,
            WellKnownDirectory.CACHES: local / "Temp",
            WellKnownDirectory.APPLICATION_SUPPORT: roaming,
        }[kind]

    data_home = _env_dir("XDG_DATA_HOME") or home / ".local" / "share"
    return {
        WellKnownDirectory.DOCUMENTS: _env_dir("XDG_DOCUMENTS_DIR") or home / "Documents",
        WellKnownDirectory.LIBRARY: data_home,
        WellKnownDirectory.CACHES: _env_dir("XDG_CACHE_HOME") or home / ".cache",
        WellKnownDirectory.APPLICATION_SUPPORT: _env_dir("XDG_CONFIG_HOME") or home / ".config",
    }[kind]
