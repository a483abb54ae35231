import textwrap

import pytest

from git_bump import events, locations
from git_bump.lua_runtime import ScriptRuntime
from git_bump.settings import ENV_PREFIX, get_all_settings


@pytest.fixture
def runtime():
    return ScriptRuntime()


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "work"
    git_dir = root / ".git"
    git_dir.mkdir(parents=True)
    return locations.Repository(root, git_dir)


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def clean_env(monkeypatch):
    for option in get_all_settings():
        monkeypatch.delenv(ENV_PREFIX + option.key.upper(), raising=False)


@pytest.fixture
def fake_repo(repo, home, clean_env, monkeypatch):
    # the CLI looks the repository up through git; point it at our temp dirs
    monkeypatch.setattr(locations, "discover_repository", lambda cwd=None: repo)
    return repo


@pytest.fixture
def captured_events():
    captured = []
    disconnects = []

    def listen(*names):
        for name in names:
            sig = events.signal(name)
            receiver = lambda _s, **kw: captured.append(kw)
            sig.connect(receiver)
            disconnects.append(lambda sig=sig, receiver=receiver: sig.disconnect(receiver))
        return captured

    yield listen
    for disconnect in disconnects:
        disconnect()


@pytest.fixture
def write_lua():
    def write(path, source):
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return write
