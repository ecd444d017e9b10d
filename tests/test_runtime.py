from sandpath import MemoryFileStore, Path
from sandpath.base import runtime
from sandpath.base.filestore import LocalFileStore


def test_local_providers_from_env(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("SANDPATH_SANDBOX_ROOT", str(tmp_path))

    providers = runtime.get_providers(force_reload=True)

    assert providers.source == "local"
    assert isinstance(providers.filestore, LocalFileStore)
    assert "Providers loaded from local" in capsys.readouterr().out
    assert Path.documents().string == str(tmp_path.resolve() / "Documents")


def test_providers_are_cached(monkeypatch):
    first = runtime.get_providers()
    assert runtime.get_providers() is first
    assert runtime.get_providers(force_reload=True) is not first


def test_set_filestore_is_default_for_paths():
    store = MemoryFileStore()
    store.write_bytes("/a/b.txt", b"abc")
    runtime.set_filestore(store)

    assert runtime.get_filestore() is store
    assert Path("/a").size == 3
    assert Path("/a").get_children()[0].store is store


def test_broken_plugin_falls_back_to_local(monkeypatch, capsys):
    monkeypatch.setenv("SANDPATH_USE_PLUGIN", "1")

    class _EP:
        def load(self):
            raise ImportError("plugin is broken")

    class _EPs:
        def select(self, group, name):
            assert (group, name) == ("sandpath.plugin", "filestore")
            return [_EP()]

    monkeypatch.setattr(runtime, "entry_points", lambda: _EPs())

    providers = runtime.get_providers(force_reload=True)

    assert providers.source == "local"
    assert "Plugin providers load failed" in capsys.readouterr().out


def test_plugin_store_is_used(monkeypatch):
    monkeypatch.setenv("SANDPATH_USE_PLUGIN", "1")
    plugin_store = MemoryFileStore(sandbox="/plugin")

    class _EP:
        def load(self):
            return lambda: plugin_store

    class _EPs:
        def select(self, group, name):
            return [_EP()]

    monkeypatch.setattr(runtime, "entry_points", lambda: _EPs())

    providers = runtime.get_providers(force_reload=True)

    assert providers.source == "plugin"
    assert Path.documents().string == "/plugin/Documents"


def test_debug_output_for_suppressed_errors(monkeypatch, capsys):
    monkeypatch.setenv("SANDPATH_DEBUG", "1")
    assert Path("/nope", store=MemoryFileStore()).attributes is None
    assert "DEBUG: attributes unavailable for '/nope'" in capsys.readouterr().out
