"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from docforest.config.policies import Policies, load_policies
from docforest.config.settings import Settings


@pytest.fixture
def minimal_policy_dict() -> dict:
    return {
        "policy_version": "test-version",
        "inference": {
            "private_name_pattern": "^_",
            "infer_from_code": True,
        },
        "hierarchy": {"duplicate_name_strategy": "first"},
        "lint": {"named_tags": ["@param", "property"]},
    }


def test_load_policies_from_dict(minimal_policy_dict: dict) -> None:
    policies = load_policies(minimal_policy_dict)
    assert isinstance(policies, Policies)
    assert policies.inference.compiled_private_pattern().search("_hidden")
    assert policies.lint.named_tags == ["param", "property"]


def test_load_policies_from_yaml(tmp_path: Path, minimal_policy_dict: dict) -> None:
    path = tmp_path / "policies.yaml"
    path.write_text(yaml.safe_dump(minimal_policy_dict), encoding="utf-8")

    policies = load_policies(path)

    assert policies.policy_version == "test-version"


def test_load_policies_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_policies(tmp_path / "absent.yaml")


def test_policy_env_override(monkeypatch: pytest.MonkeyPatch, minimal_policy_dict: dict) -> None:
    monkeypatch.setenv("DOCFOREST_POLICY__HIERARCHY__DUPLICATE_NAME_STRATEGY", "last")
    monkeypatch.setenv("DOCFOREST_POLICY__INFERENCE__INFER_FROM_CODE", "false")

    policies = load_policies(minimal_policy_dict)

    assert policies.hierarchy.duplicate_name_strategy == "last"
    assert policies.inference.infer_from_code is False


def test_invalid_private_pattern_is_rejected() -> None:
    with pytest.raises(ValidationError):
        load_policies({"inference": {"private_name_pattern": "(unclosed"}})


def test_unknown_duplicate_strategy_is_rejected() -> None:
    with pytest.raises(ValidationError):
        load_policies({"hierarchy": {"duplicate_name_strategy": "random"}})


def test_settings_environment_override(tmp_path: Path, minimal_policy_dict: dict) -> None:
    default_yaml = {
        "environment": "development",
        "paths": {"output_dir": "output", "logs_dir": "logs"},
        "log_to_file": False,
        "policies": minimal_policy_dict,
    }
    testing_yaml = {
        "log_to_file": True,
        "policies": {"policy_version": "testing"},
    }
    (tmp_path / "default.yaml").write_text(yaml.safe_dump(default_yaml), encoding="utf-8")
    (tmp_path / "testing.yaml").write_text(yaml.safe_dump(testing_yaml), encoding="utf-8")

    settings = Settings(config_dir=tmp_path, environment="testing")

    assert settings.log_to_file is True
    assert settings.policy_version == "testing"
    assert settings.policies.inference.private_name_pattern == "^_"
    assert settings.log_file.name == "docforest.log"


def test_settings_env_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, minimal_policy_dict: dict
) -> None:
    default_yaml = {
        "environment": "development",
        "paths": {"output_dir": "output", "logs_dir": "logs"},
        "policies": minimal_policy_dict,
    }
    (tmp_path / "default.yaml").write_text(yaml.safe_dump(default_yaml), encoding="utf-8")
    monkeypatch.setenv("DOCFOREST_SETTINGS__POLICIES__HIERARCHY__DUPLICATE_NAME_STRATEGY", "last")

    settings = Settings(config_dir=tmp_path)

    assert settings.policies.hierarchy.duplicate_name_strategy == "last"


def test_settings_create_dirs(tmp_path: Path) -> None:
    settings = Settings(
        config_dir=tmp_path,
        create_dirs=True,
        paths={"output_dir": tmp_path / "out", "logs_dir": tmp_path / "logs"},
    )

    assert settings.paths.output_dir.is_dir()
    assert settings.paths.logs_dir.is_dir()


def test_settings_without_yaml_uses_defaults(tmp_path: Path) -> None:
    settings = Settings(config_dir=tmp_path)

    assert settings.policies == Policies()
    assert settings.create_dirs is False
