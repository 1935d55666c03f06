import pytest

@pytest.fixture
def appdata(tmp_path, monkeypatch):
    """Point the config directory at a temporary location."""
    monkeypatch.setenv("APPDATA", str(tmp_path))
    return tmp_path / "PassAdvisor"
