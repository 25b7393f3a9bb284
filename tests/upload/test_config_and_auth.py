"""
Upload Config and Token Manager Tests

To run these tests:
    pytest tests/upload/test_config_and_auth.py -v
"""

import time

import pytest
import yaml

from upload.auth.token_manager import TokenManager
from upload.config import UploadConfig

# =============================================================================
# CONFIG TESTS
# =============================================================================


@pytest.mark.unit
def test_defaults_without_file(tmp_path):
    config = UploadConfig(config_path=tmp_path / "missing.yaml")

    assert config.inter_item_delay == 0.5
    assert config.http_timeout > 0
    assert config.file_field == "image"
    assert config.folder_field == "folderName"
    assert "image/png" in config.allowed_types
    assert config.max_file_size == 50 * 1024 * 1024


@pytest.mark.unit
def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "upload.yaml"
    path.write_text(
        yaml.dump({"inter_item_delay": 1.5, "api_base_url": "https://api.example/"}),
    )

    config = UploadConfig(config_path=path)

    assert config.inter_item_delay == 1.5
    assert config.api_base_url == "https://api.example"
    assert config.upload_url == "https://api.example/api/upload"


@pytest.mark.unit
def test_overrides_win_over_file(tmp_path):
    path = tmp_path / "upload.yaml"
    path.write_text(yaml.dump({"inter_item_delay": 1.5}))

    config = UploadConfig(config_path=path, overrides={"inter_item_delay": 0})

    assert config.inter_item_delay == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"http_timeout": 0},
        {"http_timeout": None},
        {"inter_item_delay": -1},
        {"max_file_size": 0},
        {"allowed_types": []},
        {"file_field": ""},
    ],
)
def test_invalid_values_are_rejected(tmp_path, overrides):
    with pytest.raises(ValueError):
        UploadConfig(config_path=tmp_path / "missing.yaml", overrides=overrides)


@pytest.mark.unit
def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "upload.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        UploadConfig(config_path=path)


@pytest.mark.unit
def test_save_round_trips_through_yaml(tmp_path):
    path = tmp_path / "nested" / "upload.yaml"
    config = UploadConfig(config_path=path, overrides={"inter_item_delay": 2})

    config.save()

    assert UploadConfig(config_path=path).inter_item_delay == 2


# =============================================================================
# TOKEN MANAGER TESTS
# =============================================================================


@pytest.mark.unit
def test_token_without_expiry():
    tokens = TokenManager(token="abcdefghijklmnop")

    assert tokens.get_token() == "abcdefghijklmnop"
    assert tokens.is_authenticated() is True
    assert tokens.get_status()["token"] == "abcdefghij..."


@pytest.mark.unit
def test_expired_token_is_cleared():
    tokens = TokenManager(token="old", expires_at=time.time() - 1)

    assert tokens.get_token() is None
    assert tokens.get_status() == {
        "is_authenticated": False,
        "expires_at": None,
        "token": None,
    }


@pytest.mark.unit
def test_set_and_clear_token():
    tokens = TokenManager()
    assert tokens.is_authenticated() is False

    tokens.set_token("new-token", expires_at=time.time() + 3600)
    assert tokens.get_token() == "new-token"

    tokens.clear()
    assert tokens.get_token() is None


@pytest.mark.unit
def test_empty_token_is_rejected():
    with pytest.raises(ValueError):
        TokenManager().set_token("")
