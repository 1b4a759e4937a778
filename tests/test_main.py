"""Tests for application startup."""

from __future__ import annotations

import sys

import pytest

from conftest import write_config
from flatstore.main import create_app, main
from flatstore.store import StoreInitError


@pytest.fixture()
def blocked_config(tmp_path):
    """A config whose data path is an existing directory."""

    store_path = tmp_path / "data" / "data.txt"
    store_path.mkdir(parents=True)
    return write_config(tmp_path, store_path=store_path)


def test_create_app_propagates_store_init_error(blocked_config):
    with pytest.raises(StoreInitError):
        create_app(str(blocked_config))


def test_main_exits_with_status_1_on_store_init_error(blocked_config, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["flatstore", "-c", str(blocked_config)])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1


def test_create_app_initializes_store(tmp_path):
    app = create_app(str(write_config(tmp_path)))

    assert app.state.store.path.read_bytes() == b"[]"
    assert app.state.config.server.port == 18080
