"""
Path — путь в файловой системе и быстрый доступ к стандартным каталогам.

Принцип:
- Path — неизменяемое значение (строка пути + подсказка "это каталог")
- все обращения к диску идут через FileStore (по умолчанию — runtime.get_filestore())
- resource()/folder() только склеивают строки и никогда не трогают диск

Политика ошибок:
- create_directory/remove_from_disk/get_children/read_data/write_data и
  разрешение стандартных каталогов поднимают FilesystemError
- attributes/mime_type/disable_auto_backup/size глотают ошибки
  (None / ничего / 0), подробности — только в SANDPATH_DEBUG
- documents()/library()/cache()/temp() по контракту ОС не падают;
  если всё же упали — это RuntimeError (аналог аварийного останова)
"""

from __future__ import annotations

import dataclasses
import mmap
import os
import pathlib
import re
from urllib.parse import urlsplit
from urllib.request import url2pathname

from tqdm.auto import tqdm

from sandpath.base import runtime
from sandpath.base.errors import DirectoryResolutionError, FilesystemError
from sandpath.base.filestore.base import FileStore, extension, join
from sandpath.base.filestore.types import FileExistence, FileStat, ReadOptions, WellKnownDirectory
from sandpath.base.utils import log
from sandpath.common.size import string_from_bytes

_DRIVE_ROOT = re.compile(r"^[A-Za-z]:[\\/]$")


def _location_from(raw: str | os.PathLike | "Path") -> str:
    if isinstance(raw, Path):
        return raw.string
    s = os.fspath(raw)
    if isinstance(s, bytes):
        s = os.fsdecode(s)
    if s.startswith("file:"):
        parts = urlsplit(s)
        s = url2pathname(parts.path)
        if parts.netloc and parts.netloc != "localhost":
            s = f"//{parts.netloc}{s}"
    # хвостовой разделитель не храним (кроме корня "/" и корня диска "C:\\")
    stripped = s.rstrip("/\\")
    if not stripped:
        return s[:1]
    if len(stripped) == 2 and _DRIVE_ROOT.match(s[:3]):
        return s[:3]
    return stripped


class Path:
    """Путь к файлу или каталогу."""

    __slots__ = ("_location", "_is_directory", "_store")

    def __init__(
        self,
        location: str | os.PathLike | "Path",
        *,
        is_directory: bool = False,
        store: FileStore | None = None,
    ):
        self._location = _location_from(location)
        self._is_directory = bool(is_directory or (isinstance(location, Path) and location.is_directory))
        if store is None and isinstance(location, Path):
            store = location._store
        self._store = store

    # --- Конструкторы ---

    @classmethod
    def from_url(cls, url: str, store: FileStore | None = None) -> "Path":
        """Путь из file:// URL."""
        return cls(url, store=store)

    @classmethod
    def from_directory(
        cls,
        kind: WellKnownDirectory,
        create: bool = False,
        store: FileStore | None = None,
    ) -> "Path":
        """Стандартный каталог; при create=True создаётся, если его нет."""
        if store is None:
            store = runtime.get_filestore()
        kind = WellKnownDirectory(kind)
        try:
            location = store.resolve_directory(kind, create=create)
        except DirectoryResolutionError:
            raise
        except OSError as e:
            raise DirectoryResolutionError(str(e), kind) from e
        return cls(location, is_directory=True, store=store)

    @classmethod
    def _sandbox_directory(cls, kind: WellKnownDirectory, store: FileStore | None) -> "Path":
        try:
            return cls.from_directory(kind, store=store)
        except DirectoryResolutionError as e:
            raise RuntimeError(f"{kind.value} directory must always be available") from e

    @classmethod
    def documents(cls, store: FileStore | None = None) -> "Path":
        return cls._sandbox_directory(WellKnownDirectory.DOCUMENTS, store)

    @classmethod
    def library(cls, store: FileStore | None = None) -> "Path":
        return cls._sandbox_directory(WellKnownDirectory.LIBRARY, store)

    @classmethod
    def cache(cls, store: FileStore | None = None) -> "Path":
        return cls._sandbox_directory(WellKnownDirectory.CACHES, store)

    @classmethod
    def temp(cls, store: FileStore | None = None) -> "Path":
        return cls._sandbox_directory(WellKnownDirectory.TEMP, store)

    @classmethod
    def application_support(cls, auto_create: bool = True, store: FileStore | None = None) -> "Path":
        """Каталог Application Support; по умолчанию создаётся. Ошибка пробрасывается вызывающему."""
        return cls.from_directory(WellKnownDirectory.APPLICATION_SUPPORT, create=auto_create, store=store)

    # --- Значение ---

    @property
    def string(self) -> str:
        """Полная строка пути."""
        return self._location

    location = string

    @property
    def is_directory(self) -> bool:
        return self._is_directory

    @property
    def url(self) -> str:
        uri = pathlib.Path(os.path.abspath(self._location)).as_uri()
        if self._is_directory and not uri.endswith("/"):
            uri += "/"
        return uri

    @property
    def name(self) -> str:
        return self._location.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def store(self) -> FileStore:
        """FileStore, через который идут все обращения к диску."""
        return self._store if self._store is not None else runtime.get_filestore()

    def __fspath__(self) -> str:
        return self._location

    def __str__(self) -> str:
        return self._location

    def __repr__(self) -> str:
        return f"Path({self._location!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._location == other._location

    def __hash__(self) -> int:
        return hash(self._location)

    # --- Производные пути ---

    def resource(self, name: str) -> "Path":
        """Путь к файлу name внутри текущего каталога (без обращения к диску)."""
        return Path(join(self._location, name), store=self._store)

    def folder(self, name: str) -> "Path":
        """Путь к подкаталогу name (без обращения к диску)."""
        return Path(join(self._location, name), is_directory=True, store=self._store)

    # --- Существование ---

    def _stat(self) -> FileStat | None:
        try:
            return self.store.stat(self._location)
        except (OSError, ValueError):
            return None

    @property
    def exist(self) -> bool:
        """Путь существует — файл или каталог, не важно."""
        return self.file_exist.exist

    @property
    def file_exist(self) -> FileExistence:
        """(существует, это файл) — одним запросом к ФС."""
        st = self._stat()
        if st is None:
            return FileExistence(False, False)
        return FileExistence(True, not st.is_dir)

    @property
    def folder_exist(self) -> bool:
        info = self.file_exist
        return info.exist and not info.is_file

    @property
    def path_extension(self) -> str | None:
        return extension(self._location)

    @property
    def mime_type(self) -> str | None:
        """MIME-тип по расширению; None, если расширения нет или оно неизвестно."""
        if self.path_extension is None:
            return None
        try:
            return self.store.mime_type(self._location)
        except Exception as e:
            log.debug(f"mime type lookup failed for '{self._location}'", e)
            return None

    # --- Изменение диска ---

    def create_directory(self) -> None:
        """Создаёт каталог вместе с промежуточными."""
        try:
            self.store.makedirs(self._location)
        except OSError as e:
            raise FilesystemError(str(e), path=self._location, operation="create_directory") from e

    def remove_from_disk(self) -> None:
        """Удаляет файл или каталог (рекурсивно)."""
        try:
            self.store.remove_item(self._location)
        except OSError as e:
            raise FilesystemError(str(e), path=self._location, operation="remove_from_disk") from e

    def disable_auto_backup(self) -> None:
        """Исключает каталог из автоматического резервного копирования.

        Для файлов и несуществующих путей ничего не делает. Ошибки не пробрасываются.
        """
        info = self.file_exist
        if not info.exist or info.is_file:
            return
        try:
            self.store.exclude_from_backup(self._location)
        except (OSError, ImportError) as e:
            log.debug(f"cannot exclude '{self._location}' from backup", e)

    def write_data(self, data: bytes) -> None:
        """Пишет файл целиком; родительские каталоги создаются."""
        try:
            self.store.write_bytes(self._location, bytes(data))
        except OSError as e:
            raise FilesystemError(str(e), path=self._location, operation="write_data") from e

    # --- Листинг ---

    def get_children(self, skip_hidden: bool = True) -> list["Path"]:
        """Непосредственные дочерние элементы каталога.

        Если путь не является существующим каталогом — пустой список.
        Порядок — тот, что отдаёт ФС (без сортировки).
        """
        if not self.folder_exist:
            return []
        try:
            entries = self.store.listdir(self._location, skip_hidden=skip_hidden)
        except OSError as e:
            raise FilesystemError(str(e), path=self._location, operation="get_children") from e
        return [self.folder(e.name) if e.is_dir else self.resource(e.name) for e in entries]

    # --- Метаданные и размер ---

    @property
    def attributes(self) -> FileStat | None:
        """Снимок метаданных; None, если прочитать не удалось."""
        st = self._stat()
        if st is None:
            log.debug(f"attributes unavailable for '{self._location}'")
            return None
        if not st.is_dir:
            return st
        # метка бэкапа — отдельный запрос, в обходе размера он не нужен
        try:
            excluded = self.store.is_excluded_from_backup(self._location)
        except (OSError, ImportError) as e:
            log.debug(f"backup flag unavailable for '{self._location}'", e)
            excluded = None
        return dataclasses.replace(st, excluded_from_backup=excluded)

    @property
    def size(self) -> int:
        """Размер файла; для каталога — сумма по всему дереву."""
        return self.compute_size()

    def compute_size(self, show_progress: bool = False) -> int:
        """Размер в байтах с необязательным прогресс-баром обхода.

        Обход — FileStore.walk (явный стек, защита от циклов симлинков).
        Элементы, которые исчезли или не читаются, считаются нулевыми.
        """
        st = self._stat()
        if st is None:
            return 0
        if not st.is_dir:
            return int(st.size or 0)

        total = 0
        bar = tqdm(desc="size", unit="entry", leave=False) if show_progress else None
        try:
            for _, dirs, files in self.store.walk(self._location):
                total += sum(int(f.size or 0) for f in files)
                if bar is not None:
                    bar.update(len(dirs) + len(files))
        finally:
            if bar is not None:
                bar.close()
        return total

    @property
    def size_string(self) -> str:
        return string_from_bytes(self.size)

    string_from_bytes = staticmethod(string_from_bytes)

    # --- Данные ---

    def read_data(self, options: ReadOptions = ReadOptions.NONE) -> bytes | mmap.mmap:
        """Читает файл целиком в память.

        options:
        - MAPPED_IF_SAFE / ALWAYS_MAPPED: вернуть mmap.mmap (только чтение);
          закрывает вызывающий: `with p.read_data(ReadOptions.MAPPED_IF_SAFE) as mm: ...`
        - UNCACHED: не держать файл в page cache (если ОС умеет)
        """
        try:
            return self.store.read_bytes(self._location, options)
        except (OSError, ValueError) as e:
            raise FilesystemError(str(e), path=self._location, operation="read_data") from e

    def read_text(self, encoding: str = "utf-8") -> str:
        """Читает текстовый файл целиком и возвращает строку."""
        data = self.read_data()
        return bytes(data).decode(encoding, errors="replace")
