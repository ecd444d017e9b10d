import pandas as pd

from sandpath import MemoryFileStore, Path
from sandpath.report import COLUMNS, children_frame


def _store():
    store = MemoryFileStore()
    store.write_bytes("/d/a.txt", b"x" * 10)
    store.write_bytes("/d/.hidden", b"x" * 3)
    store.write_bytes("/d/sub/b.bin", b"x" * 2048)
    return store


def test_children_frame_one_level():
    df = children_frame(Path("/d", store=_store()))

    assert list(df.columns) == COLUMNS
    rows = df.set_index("name")
    assert set(rows.index) == {"a.txt", "sub"}
    assert rows.loc["a.txt", "size"] == 10
    assert rows.loc["sub", "size"] == 2048
    assert rows.loc["sub", "size_str"] == "2KB"
    assert bool(rows.loc["sub", "is_dir"])
    assert pd.api.types.is_datetime64_any_dtype(df["mtime"])


def test_children_frame_recursive_with_hidden():
    df = children_frame(Path("/d", store=_store()), skip_hidden=False, recursive=True)
    assert set(df["path"]) == {"/d/a.txt", "/d/.hidden", "/d/sub", "/d/sub/b.bin"}


def test_children_frame_of_missing_path_is_empty():
    df = children_frame(Path("/missing", store=MemoryFileStore()))
    assert df.empty
    assert list(df.columns) == COLUMNS
