import textwrap
from pathlib import Path

import pytest

from ofxcodec.config import ClientSettings, default_settings, load_settings
from ofxcodec.constants import OfxVersion
from ofxcodec.errors import HeaderFormatError


def test_load_settings_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / 'missing.toml'
    with pytest.raises(FileNotFoundError):
        load_settings(missing)


def test_load_settings_merges_overrides(tmp_path: Path) -> None:
    config_file = tmp_path / 'client.toml'
    config_file.write_text(
        textwrap.dedent(
            """
            app_id = "OFXGO"
            app_ver = "0001"
            spec_version = "102"
            carriage_return = true
            user_agent = "ofxcodec"
            ca_cert_path = "~/certs/bank.pem"
            """
        ),
        encoding='utf-8',
    )

    settings = load_settings(config_file)
    assert isinstance(settings, ClientSettings)
    assert settings.app_id == 'OFXGO'
    assert settings.app_ver == '0001'
    assert settings.spec_version is OfxVersion.V102
    assert settings.carriage_return is True
    assert settings.user_agent == 'ofxcodec'
    assert settings.ca_cert_path == Path('~/certs/bank.pem').expanduser()
    # unspecified keys keep their defaults
    assert settings.no_indent is False
    assert settings.request_timeout == 30


def test_default_settings() -> None:
    settings = default_settings()
    assert settings.app_id == 'QWIN'
    assert settings.app_ver == '2700'
    assert settings.spec_version is OfxVersion.V203
    assert settings.ca_cert_path is None


def test_load_settings_rejects_unknown_keys(tmp_path: Path) -> None:
    config_file = tmp_path / 'client.toml'
    config_file.write_text('app_id = "OFXGO"\nuser_pass = "secret"\n', encoding='utf-8')
    with pytest.raises(ValueError, match='Unknown configuration keys: user_pass'):
        load_settings(config_file)


def test_load_settings_rejects_unknown_version(tmp_path: Path) -> None:
    config_file = tmp_path / 'client.toml'
    config_file.write_text('spec_version = 104\n', encoding='utf-8')
    with pytest.raises(HeaderFormatError, match='unsupported OFX version'):
        load_settings(config_file)
