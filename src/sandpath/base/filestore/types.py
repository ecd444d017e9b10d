"""
types — типы для FileStore.

Назначение:
- дать единый переносимый тип метаданных файла/каталога
- не привязываться к конкретному backend (local/memory/plugin)

Принцип:
- поля опциональны: разные бэкенды могут отдавать разный объём метаданных
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


class WellKnownDirectory(str, enum.Enum):
    """Стандартные каталоги приложения (песочница)."""

    DOCUMENTS = "documents"
    LIBRARY = "library"
    CACHES = "caches"
    APPLICATION_SUPPORT = "application_support"
    TEMP = "temp"


class ReadOptions(enum.Flag):
    """Опции чтения файла целиком.

    - MAPPED_IF_SAFE: отобразить файл в память, если получится (иначе обычное чтение)
    - UNCACHED: подсказать ОС не держать файл в page cache
    - ALWAYS_MAPPED: отобразить файл в память; если нельзя — ошибка
    """

    NONE = 0
    MAPPED_IF_SAFE = enum.auto()
    UNCACHED = enum.auto()
    ALWAYS_MAPPED = enum.auto()

    @property
    def wants_mapping(self) -> bool:
        return bool(self & (ReadOptions.MAPPED_IF_SAFE | ReadOptions.ALWAYS_MAPPED))


class ListEntry(NamedTuple):
    """Элемент листинга каталога: имя и (если бэкенд знает без лишних запросов) каталог ли это."""

    name: str
    is_dir: bool | None = None


class FileExistence(NamedTuple):
    """Результат одной проверки: существует ли путь и файл ли это (не каталог)."""

    exist: bool
    is_file: bool


@dataclass(frozen=True, slots=True)
class FileStat:
    """Метаданные файла/каталога на момент запроса.

    Поля намеренно опциональны.
    Разные реализации FileStore могут отдавать разные поля.
    """

    path: str
    is_file: bool
    is_dir: bool
    size: int | None = None
    mtime: float | None = None
    atime: float | None = None
    ctime: float | None = None
    mode: int | None = None  # только биты прав (0o755 и т.п.)
    device: int | None = None
    inode: int | None = None
    hidden: bool = False
    excluded_from_backup: bool | None = None  # заполняется только в Path.attributes

    @property
    def modified_at(self) -> datetime | None:
        if self.mtime is None:
            return None
        return datetime.fromtimestamp(self.mtime)

    @property
    def identity(self) -> tuple[int, int] | None:
        """(device, inode) — если бэкенд их сообщает."""
        if self.device is None or self.inode is None:
            return None
        return self.device, self.inode


# Имя из исходного контракта: снимок атрибутов файла.
FileAttribute = FileStat
