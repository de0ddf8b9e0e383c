"""Configuration utilities and dataclasses for the OFX client."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ofxcodec.constants import OfxVersion

DEFAULT_CONFIG_PATH: Path = Path.home() / '.config/ofxcodec/client.toml'
"""Default location for the user provided TOML configuration file."""

BASE_SETTINGS: dict[str, Any] = {
    'app_id': 'QWIN',
    'app_ver': '2700',
    'spec_version': 203,
    'no_indent': False,
    'carriage_return': False,
    'user_agent': '',
    'request_timeout': 30,
    'ca_cert_path': None,
}
"""Default settings merged with any local overrides."""


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """How the client identifies itself and talks to OFX servers."""

    app_id: str
    app_ver: str
    spec_version: OfxVersion
    no_indent: bool
    carriage_return: bool
    user_agent: str
    request_timeout: int
    ca_cert_path: Path | None


def _merge_settings(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay ``overrides`` on ``base``; keys ``base`` does not know are rejected."""

    unknown = sorted(set(overrides) - set(base))
    if unknown:
        raise ValueError(f'Unknown configuration keys: {", ".join(unknown)}')
    merged: dict[str, Any] = dict(base)
    merged.update(overrides)
    return merged


def _prepare_settings(raw: Mapping[str, Any]) -> ClientSettings:
    """Convert a raw dictionary into ``ClientSettings`` with proper types."""

    ca_path = raw.get('ca_cert_path')
    resolved_ca = Path(ca_path).expanduser() if isinstance(ca_path, str) and ca_path else None
    return ClientSettings(
        app_id=str(raw.get('app_id', 'QWIN')),
        app_ver=str(raw.get('app_ver', '2700')),
        spec_version=OfxVersion.from_string(str(raw.get('spec_version', 203))),
        no_indent=bool(raw.get('no_indent', False)),
        carriage_return=bool(raw.get('carriage_return', False)),
        user_agent=str(raw.get('user_agent', '')),
        request_timeout=int(raw.get('request_timeout', 30)),
        ca_cert_path=resolved_ca,
    )


def default_settings() -> ClientSettings:
    """Return ``ClientSettings`` built from ``BASE_SETTINGS`` alone."""

    return _prepare_settings(BASE_SETTINGS)


def load_settings(path: Path | None = None) -> ClientSettings:
    """Load ``ClientSettings`` from the provided TOML file path."""

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.is_file():
        raise FileNotFoundError(f'Configuration file not found: {config_path}')

    with config_path.open('rb') as handle:
        overrides = tomllib.load(handle)

    return _prepare_settings(_merge_settings(BASE_SETTINGS, overrides))
