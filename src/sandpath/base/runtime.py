"""
runtime — единственная точка, где определяется:
- установлен sandpath-plugin или нет
- какой FileStore использовать по умолчанию

Доменный код не должен импортировать sandpath-plugin напрямую.
"""

from __future__ import annotations

import os
import traceback
from dataclasses import dataclass
from importlib.metadata import entry_points

from sandpath.base.filestore import FileStore, LocalFileStore
from sandpath.base.utils import log


@dataclass(frozen=True)
class Providers:
    filestore: FileStore
    source: str  # "plugin" | "local"


_PROVIDERS: Providers | None = None


def _use_plugin() -> bool:
    return os.getenv("SANDPATH_USE_PLUGIN", "1").strip() not in ("0", "false", "False")


def _load_plugin_providers() -> Providers | None:
    """Пытается загрузить FileStore из sandpath-plugin через entry-points."""
    try:
        eps = entry_points().select(group="sandpath.plugin", name="filestore")
        loaded_any = False
        for ep in eps:
            loaded_any = True
            factory = ep.load()
            result = factory()
            # 1) Основной формат: сразу FileStore
            if hasattr(result, "resolve_directory") and hasattr(result, "stat"):
                return Providers(filestore=result, source="plugin")

            # 2) Альтернативный формат: dict{"filestore": ...}
            if isinstance(result, dict):
                fs = result.get("filestore") or result.get("store")
                if fs is not None:
                    return Providers(filestore=fs, source="plugin")

        if loaded_any:
            # entry-point существует, но формат ответа не распознан
            log.warn("Plugin entrypoint найден, но filestore не распознан; ожидается FileStore или dict с ключом filestore")
    except Exception as e:
        # Плагин может отсутствовать или быть сломан в среде.
        # В этом случае sandpath обязан перейти на local-режим.
        if log.debug_enabled():
            log.debug("Failed to load plugin providers", e)
            traceback.print_exc()
        else:
            log.warn("Plugin providers load failed; set SANDPATH_DEBUG=1 to see details")
        return None
    return None


def _build_local_providers() -> Providers:
    """Локальный провайдер (fallback вне контура)."""
    root = os.getenv("SANDPATH_LOCAL_ROOT")  # опционально: базовый каталог для относительных путей
    sandbox = os.getenv("SANDPATH_SANDBOX_ROOT")  # опционально: раскладка песочницы
    return Providers(filestore=LocalFileStore(root=root, sandbox=sandbox), source="local")


def get_providers(force_reload: bool = False) -> Providers:
    """Возвращает активные провайдеры. Кэшируется на время процесса."""
    global _PROVIDERS
    if _PROVIDERS is not None and not force_reload:
        return _PROVIDERS

    if _use_plugin():
        plugin_providers = _load_plugin_providers()
        if plugin_providers is not None:
            _PROVIDERS = plugin_providers
            log.info("Providers loaded from plugin")
            return _PROVIDERS

    _PROVIDERS = _build_local_providers()
    log.info("Providers loaded from local")
    return _PROVIDERS


def set_filestore(store: FileStore | None) -> None:
    """Подменяет FileStore по умолчанию (None — сбросить к автоопределению)."""
    global _PROVIDERS
    _PROVIDERS = None if store is None else Providers(filestore=store, source="custom")


def get_filestore() -> FileStore:
    return get_providers().filestore
