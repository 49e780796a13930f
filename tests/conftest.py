"""Shared fixtures for htmlroute tests."""

from pathlib import Path

import pytest

from htmlroute.config import ENV_HOST, ENV_MODE, ENV_PORT, ENV_ROOT


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's HTMLROUTE_* variables out of config loading."""
    for name in (ENV_MODE, ENV_ROOT, ENV_HOST, ENV_PORT):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def html_root(tmp_path: Path) -> Path:
    """An html root with the pages used by the route-table scenarios."""
    root = tmp_path / "html"
    root.mkdir()
    (root / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    (root / "user.html").write_text("<h1>User</h1>", encoding="utf-8")
    (root / "docs.html").write_text("<h1>Docs</h1>", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    return root
