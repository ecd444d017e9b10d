import tempfile

import pytest

from sandpath import DirectoryResolutionError, MemoryFileStore, Path, WellKnownDirectory
from sandpath.base.filestore import LocalFileStore


class _BrokenStore(MemoryFileStore):
    def resolve_directory(self, kind, create=False):
        raise DirectoryResolutionError("no home", kind)


def test_sandbox_layout_in_memory(mem_store):
    assert Path.documents(store=mem_store).string == "/sandbox/Documents"
    assert Path.library(store=mem_store).string == "/sandbox/Library"
    assert Path.cache(store=mem_store).string == "/sandbox/Library/Caches"
    assert Path.temp(store=mem_store).string == "/sandbox/tmp"
    assert Path.documents(store=mem_store).is_directory


def test_resolution_without_create_does_not_create(mem_store):
    p = Path.from_directory(WellKnownDirectory.DOCUMENTS, store=mem_store)
    assert not p.exist


def test_resolution_with_create(mem_store):
    p = Path.from_directory("caches", create=True, store=mem_store)
    assert p.folder_exist
    assert p.store is mem_store


def test_application_support_auto_create(mem_store):
    p = Path.application_support(store=mem_store)
    assert p.string == "/sandbox/Library/Application Support"
    assert p.folder_exist

    q = Path.application_support(auto_create=False, store=MemoryFileStore())
    assert not q.exist


def test_application_support_propagates_failure(mem_store):
    mem_store.write_bytes("/sandbox/Library", b"not a directory")
    with pytest.raises(DirectoryResolutionError) as ei:
        Path.application_support(store=mem_store)
    assert ei.value.directory is WellKnownDirectory.APPLICATION_SUPPORT
    assert isinstance(ei.value.__cause__, FileExistsError)


@pytest.mark.parametrize("factory", [Path.documents, Path.library, Path.cache, Path.temp])
def test_core_directories_abort_on_failure(factory):
    with pytest.raises(RuntimeError) as ei:
        factory(store=_BrokenStore())
    assert isinstance(ei.value.__cause__, DirectoryResolutionError)


def test_local_sandbox_layout(tmp_path, local_store):
    root = (tmp_path / "sandbox").resolve()

    assert Path.documents(store=local_store).string == str(root / "Documents")
    assert Path.cache(store=local_store).string == str(root / "Library" / "Caches")

    support = Path.application_support(store=local_store)
    assert support.string == str(root / "Library" / "Application Support")
    assert (root / "Library" / "Application Support").is_dir()


def test_local_platform_temp():
    assert Path.temp(store=LocalFileStore()).string == tempfile.gettempdir().rstrip("/\\")


def test_local_platform_directories_resolve(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    store = LocalFileStore()

    for kind in WellKnownDirectory:
        p = Path.from_directory(kind, store=store)
        assert p.string


def test_local_resolution_create_failure(tmp_path):
    (tmp_path / "sandbox").write_bytes(b"file in the way")
    store = LocalFileStore(sandbox=str(tmp_path / "sandbox"))
    with pytest.raises(DirectoryResolutionError):
        Path.from_directory(WellKnownDirectory.DOCUMENTS, create=True, store=store)
