"""
Пример: стандартные каталоги и размер кэша.

Запуск:
    python scripts/sandbox_size_example.py
    SANDPATH_SANDBOX_ROOT=/tmp/app python scripts/sandbox_size_example.py
"""

from __future__ import annotations

from sandpath import Path
from sandpath.report import children_frame


def main() -> None:
    print("documents:", Path.documents())
    print("library:  ", Path.library())
    print("temp:     ", Path.temp())

    support = Path.application_support(auto_create=True)
    support.disable_auto_backup()
    print("support:  ", support, "exists:", support.folder_exist)

    cache = Path.cache()
    size = cache.compute_size(show_progress=True)
    print("cache size:", Path.string_from_bytes(size))

    df = children_frame(cache)
    if not df.empty:
        print(df.sort_values("size", ascending=False).head(10).to_string(index=False))


if __name__ == "__main__":
    main()
