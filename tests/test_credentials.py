"""Tests for the token store."""

import stat

import pytest
import yaml

from redibo.retrieval.credentials import CredentialStore


def test_round_trip(tmp_path):
    store = CredentialStore(tmp_path / "nested" / "credentials.yaml")

    store.save_token("abc")

    assert store.load_token() == "abc"
    data = yaml.safe_load(store.path.read_text(encoding="utf-8"))
    assert data["saved_at_utc"].endswith("Z")


def test_file_is_private(tmp_path):
    store = CredentialStore(tmp_path / "credentials.yaml")
    store.save_token("abc")

    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600


def test_missing_file_has_no_token(tmp_path):
    assert CredentialStore(tmp_path / "none.yaml").load_token() is None


def test_malformed_file_has_no_token(tmp_path):
    path = tmp_path / "credentials.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    assert CredentialStore(path).load_token() is None


def test_empty_token_refused(tmp_path):
    with pytest.raises(ValueError):
        CredentialStore(tmp_path / "credentials.yaml").save_token("")


def test_clear(tmp_path):
    store = CredentialStore(tmp_path / "credentials.yaml")
    store.save_token("abc")

    store.clear()
    store.clear()

    assert store.load_token() is None
    assert not store.path.exists()
