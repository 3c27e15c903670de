"""
Pytest configuration and shared fixtures for kube-switch tests

Provides sample kubeconfig documents, files on disk in both formats and
an isolated settings instance.
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from kube_switch.codec import DocumentCodec
from kube_switch.config import KubeSwitchSettings, set_config

SAMPLE_KUBECONFIG: dict[str, Any] = {
    "apiVersion": "v1",
    "clusters": [
        {
            "cluster": {
                "certificate-authority-data": "LS0tLS1CRUdJTg==",
                "server": "https://a.example.com:6443",
            },
            "name": "a-cluster",
        },
        {"cluster": {"server": "https://b.example.com:6443"}, "name": "b-cluster"},
    ],
    "contexts": [
        {"context": {"cluster": "a-cluster", "namespace": "x", "user": "a-user"}, "name": "a"},
        {"context": {"cluster": "b-cluster", "namespace": "y", "user": "b-user"}, "name": "b"},
    ],
    "current-context": "a",
    "kind": "Config",
    "preferences": {},
    "users": [{"name": "a-user", "user": {"token": "secret-token"}}],
    "x-future-field": {"nested": [1, 2, {"deep": True}]},
}


def dump_yaml(data: dict[str, Any]) -> bytes:
    """Serialize the way the codec does so round trips can compare bytes"""
    return yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True, indent=2
    ).encode("utf-8")


def dump_json(data: dict[str, Any]) -> bytes:
    return (json.dumps(data, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the global settings and environment out of each test"""
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.setenv("KUBE_SWITCH_SETTINGS_FILE", str(tmp_path / "no-settings.yml"))
    settings = KubeSwitchSettings()
    set_config(settings)
    yield settings
    set_config(None)


@pytest.fixture
def sample_data() -> dict[str, Any]:
    """A fresh copy of the sample kubeconfig mapping"""
    return copy.deepcopy(SAMPLE_KUBECONFIG)


@pytest.fixture
def codec() -> DocumentCodec:
    return DocumentCodec()


@pytest.fixture
def yaml_kubeconfig(tmp_path, sample_data) -> Path:
    """Sample kubeconfig written as YAML"""
    path = tmp_path / "config"
    path.write_bytes(dump_yaml(sample_data))
    path.chmod(0o600)
    return path


@pytest.fixture
def json_kubeconfig(tmp_path, sample_data) -> Path:
    """Sample kubeconfig written as JSON"""
    path = tmp_path / "config.json"
    path.write_bytes(dump_json(sample_data))
    path.chmod(0o600)
    return path
