import pytest


@pytest.fixture(autouse=True)
def _isolated_artifacts(tmp_path, monkeypatch):
    # Log lines land in ./artifacts; keep every test in its own directory.
    monkeypatch.chdir(tmp_path)
