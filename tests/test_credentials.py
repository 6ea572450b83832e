import os
import stat

import pytest

from harvestcli.config import paths
from harvestcli.config.credentials import (
    DEFAULT_CLIENT_NAME,
    ClientCredentials,
    client_credentials_exist,
    client_credentials_path,
    delete_client_credentials,
    list_clients,
    normalize_client_name_or_default,
    read_client_credentials,
    write_client_credentials,
)
from harvestcli.config.settings import ConfigError


@pytest.fixture
def xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


def test_read_write_client_credentials(xdg):
    creds = ClientCredentials(
        client_id="test-client-id",
        client_secret="secret",
        redirect_uri="http://localhost:8080/callback",
    )
    write_client_credentials("testclient", creds)

    path = client_credentials_path("testclient")
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    assert read_client_credentials("testclient") == creds


def test_default_client_name(xdg):
    creds = ClientCredentials(client_id="default-id", client_secret="secret")
    write_client_credentials("", creds)
    assert read_client_credentials("").client_id == "default-id"
    assert client_credentials_path("").endswith(DEFAULT_CLIENT_NAME + ".json5")


def test_client_credentials_exist(xdg):
    assert client_credentials_exist("nonexistent") is False
    write_client_credentials("exists", ClientCredentials(client_id="id", client_secret="secret"))
    assert client_credentials_exist("exists") is True


def test_list_clients(xdg):
    assert list_clients() == []
    creds = ClientCredentials(client_id="id", client_secret="secret")
    write_client_credentials("client2", creds)
    write_client_credentials("client1", creds)
    os.makedirs(os.path.join(paths.clients_dir(), "sub.json5"))
    with open(os.path.join(paths.clients_dir(), "notes.txt"), "w") as handle:
        handle.write("x")
    assert list_clients() == ["client1", "client2"]


def test_write_credentials_validation(xdg):
    with pytest.raises(ValueError):
        write_client_credentials("test", None)
    with pytest.raises(ValueError, match="client_id"):
        write_client_credentials("test", ClientCredentials(client_id="", client_secret="secret"))
    with pytest.raises(ValueError, match="client_secret"):
        write_client_credentials("test", ClientCredentials(client_id="id", client_secret=""))


def test_read_nonexistent_client(xdg):
    with pytest.raises(ConfigError, match="not found"):
        read_client_credentials("nonexistent")


def test_read_credentials_missing_secret(xdg):
    paths.ensure_clients_dir()
    with open(client_credentials_path("partial"), "w", encoding="utf-8") as handle:
        handle.write("{client_id: 'id', // comment\n}")
    with pytest.raises(ConfigError, match="client_secret"):
        read_client_credentials("partial")


def test_read_credentials_invalid(xdg):
    paths.ensure_clients_dir()
    with open(client_credentials_path("bad"), "w", encoding="utf-8") as handle:
        handle.write("[")
    with pytest.raises(ConfigError, match="parsing"):
        read_client_credentials("bad")


def test_delete_client_credentials(xdg):
    write_client_credentials("todelete", ClientCredentials(client_id="id", client_secret="secret"))
    assert client_credentials_exist("todelete") is True
    delete_client_credentials("todelete")
    assert client_credentials_exist("todelete") is False
    with pytest.raises(ConfigError):
        delete_client_credentials("nonexistent")
    with pytest.raises(ValueError):
        delete_client_credentials("")


def test_to_dict_omits_empty_redirect():
    creds = ClientCredentials(client_id="id", client_secret="secret")
    assert creds.to_dict() == {"client_id": "id", "client_secret": "secret"}


@pytest.mark.parametrize(
    "raw, expected",
    [("", "default"), ("  ", "default"), (" Work.Client_1 ", "work.client_1"), ("a-b", "a-b")],
)
def test_normalize_client_name(raw, expected):
    assert normalize_client_name_or_default(raw) == expected


@pytest.mark.parametrize("raw", ["bad name", "x/y", "é"])
def test_normalize_client_name_invalid(raw):
    with pytest.raises(ValueError):
        normalize_client_name_or_default(raw)