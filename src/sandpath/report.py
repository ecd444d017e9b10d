"""
report — содержимое каталога в виде pandas.DataFrame.

Удобно для ноутбуков: посмотреть, что лежит в каталоге и сколько занимает.

Колонки: path, name, is_file, is_dir, size, size_str, mtime.
- size для каталога — рекурсивная сумма (как Path.size)
- если атрибуты прочитать не удалось, строка остаётся с пустыми метаданными
- recursive=True идёт через FileStore.walk: каждый каталог — один раз
"""

from __future__ import annotations

import pandas as pd

from sandpath.common.size import string_from_bytes
from sandpath.path import Path

COLUMNS = ["path", "name", "is_file", "is_dir", "size", "size_str", "mtime"]


def _row(p: Path) -> dict:
    st = p.attributes
    if st is None:
        return {
            "path": p.string,
            "name": p.name,
            "is_file": None,
            "is_dir": None,
            "size": None,
            "size_str": None,
            "mtime": pd.NaT,
        }
    size = p.size if st.is_dir else int(st.size or 0)
    return {
        "path": p.string,
        "name": p.name,
        "is_file": st.is_file,
        "is_dir": st.is_dir,
        "size": size,
        "size_str": string_from_bytes(size),
        "mtime": pd.to_datetime(st.mtime, unit="s") if st.mtime is not None else pd.NaT,
    }


def _iter_entries(root: Path, skip_hidden: bool, recursive: bool):
    if not recursive:
        yield from root.get_children(skip_hidden=skip_hidden)
        return
    # FileStore.walk не заходит в уже виденные каталоги (циклы симлинков)
    for _, dirs, files in root.store.walk(root.string, skip_hidden=skip_hidden):
        for st in dirs:
            yield Path(st.path, is_directory=True, store=root.store)
        for st in files:
            yield Path(st.path, store=root.store)


def children_frame(path: Path | str, skip_hidden: bool = True, recursive: bool = False) -> pd.DataFrame:
    """Таблица по дочерним элементам каталога (или по всему дереву при recursive=True)."""
    root = path if isinstance(path, Path) else Path(path)
    rows = [_row(p) for p in _iter_entries(root, skip_hidden, recursive)]
    return pd.DataFrame(rows, columns=COLUMNS)
