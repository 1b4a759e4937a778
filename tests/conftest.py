"""Shared fixtures: a flatstore app built from a temporary configuration."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Optional

import pytest

INDEX_HTML = b"<!DOCTYPE html><html><body><h1>home</h1></body></html>\n"
STYLE_CSS = b"body { color: #333; }\n"


def write_config(
    tmp_path: Path,
    *,
    append_on_read: bool = False,
    read_timeout: float = 15,
    write_timeout: float = 15,
    store_path: Optional[Path] = None,
    create_index: bool = True,
) -> Path:
    """Lay out a static directory and write a YAML config pointing at tmp_path."""

    static_dir = tmp_path / "static"
    static_dir.mkdir(exist_ok=True)
    (static_dir / "style.css").write_bytes(STYLE_CSS)
    if create_index:
        (static_dir / "index.html").write_bytes(INDEX_HTML)

    data_path = store_path or tmp_path / "data" / "data.txt"

    config = textwrap.dedent(
        f"""
        server:
          addr: "127.0.0.1"
          port: 18080
          readTimeout: {read_timeout}
          writeTimeout: {write_timeout}
        store:
          path: "{data_path.as_posix()}"
          placeholder: "[]"
          appendOnRead: {"true" if append_on_read else "false"}
        static:
          dir: "{static_dir.as_posix()}"
          index: "index.html"
          mountPath: "/static"
        logging:
          json: false
          file: ""
          level: "INFO"
        """
    )

    config_path = tmp_path / "flatstore.yaml"
    config_path.write_text(config, encoding="utf-8")
    return config_path


@pytest.fixture()
def data_path(tmp_path):
    return tmp_path / "data" / "data.txt"


@pytest.fixture()
def make_app(tmp_path):
    """Factory building an app from write_config keyword options."""

    from flatstore.main import create_app

    def _make_app(**options):
        return create_app(str(write_config(tmp_path, **options)))

    return _make_app


@pytest.fixture()
def client(make_app):
    """Test client over a default configuration."""

    pytest.importorskip("httpx", reason="httpx is required for TestClient")
    from fastapi.testclient import TestClient

    with TestClient(make_app()) as client:
        yield client
