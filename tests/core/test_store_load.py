# tests/core/test_store_load.py
"""
Testes de carregamento e recarga da Store.

Os testes asseguram que:
- `load()` lê `.env` do diretório corrente
- `load_from(path)` lê um caminho explícito
- arquivo ausente ou ilegível gera `LoadError` referenciando o caminho
- `reload()` substitui o mapeamento inteiro
- `reload()` com falha não altera o mapeamento (tudo-ou-nada)
"""

from pathlib import Path

import pytest

try:
    from envie.core.errors import LoadError
    from envie.core.store import DEFAULT_ENV_PATH, Store
except Exception as e:  # noqa: BLE001
    Store = None
    LoadError = None
    DEFAULT_ENV_PATH = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando a Store ou suas exceções não podem ser importadas."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing store/errors modules. Implement:\n"
            "- src/envie/core/store.py (Store)\n"
            "- src/envie/core/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_load_reads_default_path_from_cwd(tmp_path: Path, monkeypatch, fake_env):
    _require_imports()
    (tmp_path / ".env").write_text("A=1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    store = Store.load(environment=fake_env)

    assert store.get_all() == {"A": "1"}
    assert store.path == Path(DEFAULT_ENV_PATH)


def test_load_missing_default_raises(tmp_path: Path, monkeypatch, fake_env):
    _require_imports()
    monkeypatch.chdir(tmp_path)

    with pytest.raises(LoadError) as info:
        Store.load(environment=fake_env)

    assert ".env" in str(info.value)
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_load_from_explicit_path(store):
    _require_imports()
    assert store.get_all()["PORT"] == "8080"
    assert store.events[-1]["message"] == "config loaded"
    assert store.events[-1]["count"] == 6


def test_load_from_missing_path_references_path(tmp_path: Path, fake_env):
    _require_imports()
    missing = tmp_path / "nope" / "app.env"

    with pytest.raises(LoadError) as info:
        Store.load_from(missing, environment=fake_env)

    assert str(missing) in str(info.value)
    assert info.value.path == missing


def test_load_from_invalid_utf8_raises(tmp_path: Path, fake_env):
    _require_imports()
    path = tmp_path / ".env"
    path.write_bytes(b"A=\xff\xfe\n")

    with pytest.raises(LoadError) as info:
        Store.load_from(path, environment=fake_env)

    assert isinstance(info.value.__cause__, UnicodeDecodeError)


def test_load_empty_file_is_empty_store(tmp_path: Path, fake_env):
    _require_imports()
    path = tmp_path / ".env"
    path.write_text("", encoding="utf-8")

    assert Store.load_from(path, environment=fake_env).get_all() == {}


def test_reload_replaces_whole_mapping(store, env_file: Path):
    _require_imports()
    env_file.write_text("NEW=1\n", encoding="utf-8")

    store.reload()

    assert store.get_all() == {"NEW": "1"}
    assert store.events[-1]["message"] == "config reloaded"


def test_reload_drops_entries_set_in_memory_only(tmp_path: Path, fake_env):
    _require_imports()
    path = tmp_path / ".env"
    path.write_text("A=1\n", encoding="utf-8")
    store = Store({"MEM": "x"}, path=path, environment=fake_env)

    store.reload()

    assert store.get_all() == {"A": "1"}


def test_reload_failure_keeps_previous_state(store, env_file: Path):
    _require_imports()
    before = store.get_all()
    env_file.unlink()

    with pytest.raises(LoadError):
        store.reload()

    assert store.get_all() == before
    assert store.events[-1]["level"] == "ERROR"
    assert store.events[-1]["message"] == "reload failed"
