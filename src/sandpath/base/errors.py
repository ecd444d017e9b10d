"""
errors — типизированные ошибки файловых операций.

Политика:
- операции, которые обязаны сообщать об ошибке, поднимают FilesystemError
- исходное исключение ОС всегда сохраняется в __cause__ (raise ... from e)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandpath.base.filestore.types import WellKnownDirectory


class FilesystemError(OSError):
    """Ошибка обращения к файловой системе (создание, удаление, листинг, чтение)."""

    def __init__(self, message: str, path: str | None = None, operation: str | None = None):
        super().__init__(message)
        self.path = path
        self.operation = operation

    def __str__(self) -> str:
        base = self.args[0] if self.args else ""
        if self.operation and self.path is not None:
            return f"{self.operation} failed for '{self.path}': {base}"
        return str(base)


class DirectoryResolutionError(FilesystemError):
    """Не удалось определить (или создать) стандартный каталог."""

    def __init__(self, message: str, directory: "WellKnownDirectory", path: str | None = None):
        super().__init__(message, path=path, operation="resolve_directory")
        self.directory = directory

    def __str__(self) -> str:
        base = self.args[0] if self.args else ""
        return f"cannot resolve {self.directory.value} directory: {base}"
