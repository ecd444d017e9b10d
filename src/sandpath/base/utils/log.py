"""
log — диагностические сообщения sandpath.

Политика (как в runtime):
- INFO/WARN печатаются всегда, коротко
- DEBUG печатается только при SANDPATH_DEBUG=1, вместе с причиной
"""

from __future__ import annotations

import os

_TRUE = ("1", "true", "True", "yes", "YES")


def debug_enabled() -> bool:
    return os.getenv("SANDPATH_DEBUG", "0").strip() in _TRUE


def info(msg: str) -> None:
    print(f"INFO: {msg}")


def warn(msg: str) -> None:
    print(f"WARN: {msg}")


def debug(msg: str, exc: BaseException | None = None) -> None:
    """Печатает сообщение (и repr исключения), только если включён SANDPATH_DEBUG."""
    if not debug_enabled():
        return
    if exc is not None:
        print(f"DEBUG: {msg}: {exc!r}")
    else:
        print(f"DEBUG: {msg}")
