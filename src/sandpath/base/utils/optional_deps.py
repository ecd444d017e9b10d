"""
optional_deps — платформенные зависимости, которые нужны не везде.

Пример: xattr нужен только на macOS (там нет os.setxattr), и только
для метки исключения из бэкапа. Импорт делается в момент использования.

Политика:
- по умолчанию — ImportError с готовой командой установки
- при SANDPATH_AUTO_PIP=1 — ставит requirement через pip и импортирует ещё раз
"""

from __future__ import annotations

import importlib
import os
import subprocess
import sys
from types import ModuleType

from sandpath.base.utils import log


def auto_pip_enabled() -> bool:
    return os.getenv("SANDPATH_AUTO_PIP", "0").strip() in ("1", "true", "True", "yes", "YES")


def _pip_install(requirement: str) -> None:
    subprocess.check_call([sys.executable, "-m", "pip", "install", requirement])


def ensure_import(module: str, requirement: str | None = None, *, hint: str | None = None) -> ModuleType:
    """
    Импортирует module; если его нет — ставит (SANDPATH_AUTO_PIP=1) или объясняет, как поставить.

    requirement — строка для pip (например "xattr>=0.10"), по умолчанию имя модуля.
    hint — дополнительная подсказка в тексте ошибки.
    """
    try:
        return importlib.import_module(module)
    except ImportError as e:
        req = requirement or module

        if auto_pip_enabled():
            log.info(f"installing optional dependency: {req}")
            _pip_install(req)
            importlib.invalidate_caches()
            return importlib.import_module(module)

        msg = f"Optional dependency is missing: '{module}'. Install: pip install {req}"
        if hint:
            msg += f"\nHint: {hint}"
        raise ImportError(msg) from e
