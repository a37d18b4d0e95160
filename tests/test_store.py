"""凭据存储测试。"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from najie_ai_draw.draw import ProviderConfig
from najie_ai_draw.store import CredentialStore, Credentials


@pytest.fixture
def store(tmp_path: Path) -> CredentialStore:
    return CredentialStore(tmp_path / "home" / "config.json")


class TestCredentials:
    """Credentials 测试。"""

    def test_defaults_not_configured(self):
        credentials = Credentials()
        assert credentials.provider == "hunyuan"
        assert credentials.region == "ap-guangzhou"
        assert credentials.is_configured is False

    @pytest.mark.parametrize("secret_id, secret_key", [("AKID", ""), ("", "key")])
    def test_partial_is_not_configured(self, secret_id, secret_key):
        assert Credentials(secret_id=secret_id, secret_key=secret_key).is_configured is False

    def test_from_dict_fills_defaults(self):
        credentials = Credentials.from_dict({"secretId": "AKID", "secretKey": "k", "region": ""})
        assert credentials.secret_id == "AKID"
        assert credentials.region == "ap-guangzhou"
        assert credentials.provider == "hunyuan"

    def test_masked(self):
        credentials = Credentials(secret_id="AKID1234567890", secret_key="topsecret")
        masked = credentials.masked()
        assert masked["secretId"] == "AKID1234***"
        assert masked["secretKey"] == "***"
        assert "topsecret" not in json.dumps(masked)

    def test_masked_empty(self):
        masked = Credentials().masked()
        assert masked["secretId"] == ""
        assert masked["secretKey"] == ""

    def test_provider_config(self):
        credentials = Credentials(secret_id="X", secret_key="Y", region="ap-beijing")
        assert credentials.provider_config() == ProviderConfig("X", "Y", "ap-beijing")


class TestCredentialStore:
    """CredentialStore 测试。"""

    def test_missing_file_returns_defaults(self, store: CredentialStore):
        assert store.load() == Credentials()

    def test_save_creates_directory(self, store: CredentialStore):
        store.save(Credentials(secret_id="X", secret_key="Y"))

        assert store.path.exists()
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data == {
            "provider": "hunyuan",
            "secretId": "X",
            "secretKey": "Y",
            "region": "ap-guangzhou",
        }

    def test_roundtrip(self, store: CredentialStore):
        credentials = Credentials(secret_id="X", secret_key="Y", region="ap-shanghai")
        store.save(credentials)
        assert store.load() == credentials

    def test_save_overwrites(self, store: CredentialStore):
        store.save(Credentials(secret_id="old", secret_key="old"))
        store.save(Credentials(secret_id="new", secret_key="new"))
        assert store.load().secret_id == "new"

    def test_corrupt_file_returns_defaults(self, store: CredentialStore):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load() == Credentials()

    def test_non_object_returns_defaults(self, store: CredentialStore):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[1, 2]", encoding="utf-8")
        assert store.load() == Credentials()
