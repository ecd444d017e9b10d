"""
FileStore — универсальный интерфейс доступа к файловой системе.

Принцип:
- FileStore отвечает за операции с путями/файлами/каталогами
- Path (sandpath.path) — только удобная обёртка поверх FileStore

Почему интерфейс отдельный:
- Path не должен ходить в ОС напрямую: в тестах подставляется MemoryFileStore,
  внутри контура — реализация из плагина.

Важно:
- write_bytes/mime_type/walk имеют дефолтные реализации поверх базовых методов,
  чтобы бэкенды можно было реализовать минимально.
- walk — единственный рекурсивный обход: его используют Path.compute_size и report.
"""

from __future__ import annotations

import mimetypes
import mmap
import posixpath
from typing import BinaryIO, Iterator, Protocol, Tuple

from sandpath.base.filestore.types import FileStat, ListEntry, ReadOptions, WellKnownDirectory
from sandpath.base.utils import log


def join(parent: str, name: str) -> str:
    """Склейка пути без обращения к диску.

    Корректно обрабатывает корень "/" (иначе теряется ведущий слэш)
    и пустой/текущий каталог.
    """
    name = str(name).lstrip("/")
    if parent == "/":
        return f"/{name}"
    p = str(parent).rstrip("/")
    if not p or p == ".":
        return name
    return f"{p}/{name}"


def extension(path: str) -> str | None:
    """Расширение имени файла без точки; None, если его нет."""
    name = posixpath.basename(str(path).replace("\\", "/").rstrip("/"))
    ext = posixpath.splitext(name)[1]
    return ext[1:] if len(ext) > 1 else None


class FileStore(Protocol):
    """Универсальный транспорт файлов и каталогов."""

    # --- Потоки ---

    def open_read(self, path: str) -> BinaryIO:
        """Открывает бинарный поток чтения."""
        ...

    def open_write(self, path: str) -> BinaryIO:
        """Открывает бинарный поток записи (родительские каталоги создаются)."""
        ...

    # --- Базовые операции ---

    def stat(self, path: str) -> FileStat:
        """Возвращает метаданные одним запросом. Нет пути — FileNotFoundError."""
        ...

    def listdir(self, path: str, skip_hidden: bool = False) -> list[ListEntry]:
        """Возвращает элементы каталога (имя + признак каталога) в порядке, который отдаёт бэкенд."""
        ...

    def makedirs(self, path: str) -> None:
        """Создаёт каталог (рекурсивно). Существующий каталог — не ошибка."""
        ...

    def remove_item(self, path: str) -> None:
        """Удаляет файл или каталог вместе с содержимым."""
        ...

    def read_bytes(self, path: str, options: ReadOptions = ReadOptions.NONE) -> bytes | mmap.mmap:
        """Читает файл целиком. При отображении в память возвращает mmap — его закрывает вызывающий."""
        ...

    # --- Песочница ---

    def resolve_directory(self, kind: WellKnownDirectory, create: bool = False) -> str:
        """Возвращает путь стандартного каталога; при create=True создаёт его."""
        ...

    def exclude_from_backup(self, path: str) -> None:
        """Помечает каталог как исключённый из автоматического резервного копирования."""
        ...

    def is_excluded_from_backup(self, path: str) -> bool | None:
        """Стоит ли метка исключения из бэкапа; None — бэкенд этого не знает."""
        ...

    # --- Дефолтные "удобные" методы ---

    def write_bytes(self, path: str, data: bytes) -> None:
        """Пишет файл целиком (байтами)."""
        with self.open_write(path) as f:
            f.write(data)

    def mime_type(self, path: str) -> str | None:
        """MIME-тип по расширению (через реестр mimetypes)."""
        ext = extension(path)
        if ext is None:
            return None
        mime, _ = mimetypes.guess_type(f"file.{ext}", strict=False)
        return mime

    def walk(self, top: str, skip_hidden: bool = False) -> Iterator[Tuple[str, list[FileStat], list[FileStat]]]:
        """Рекурсивный обход каталога (аналог os.walk, но сразу с метаданными).

        Возвращает:
        - dirpath: путь каталога
        - dirs: FileStat подкаталогов
        - files: FileStat остальных элементов

        Поведение:
        - элементы, которые не удалось прочитать, пропускаются (обход не падает)
        - каталог с уже виденными (device, inode) повторно не обходится,
          поэтому циклы из симлинков заканчиваются
        - при skip_hidden скрытые элементы не попадают в выдачу и не обходятся
        """
        try:
            top_st = self.stat(top)
        except OSError as e:
            log.debug(f"walk: skip '{top}'", e)
            return
        if not top_st.is_dir:
            return

        seen: set[tuple[int, int]] = set()
        if top_st.identity is not None:
            seen.add(top_st.identity)

        stack: list[str] = [top]

        while stack:
            dirpath = stack.pop()
            try:
                entries = self.listdir(dirpath, skip_hidden=skip_hidden)
            except OSError as e:
                log.debug(f"walk: skip unreadable directory '{dirpath}'", e)
                continue

            dirs: list[FileStat] = []
            files: list[FileStat] = []

            for entry in entries:
                full = join(dirpath, entry.name)
                try:
                    st = self.stat(full)
                except OSError as e:
                    log.debug(f"walk: skip '{full}'", e)
                    continue
                if not st.is_dir:
                    files.append(st)
                    continue
                ident = st.identity
                if ident is not None:
                    if ident in seen:
                        continue
                    seen.add(ident)
                dirs.append(st)

            yield dirpath, dirs, files

            for st in reversed(dirs):
                stack.append(st.path)
