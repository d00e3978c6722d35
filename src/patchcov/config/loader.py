"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (PATCHCOV__SECTION__KEY)
3. Repo config (.patchcov.yaml in the repository root)
4. Global config (~/.config/patchcov/config.yaml)
5. Built-in defaults

Repo config example:

    analyzer:
      lcov: coverage/lcov/app.lcov
      ruby-syntax: "3.2"
      path: .
    annotator:
      level: warning
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from patchcov.config.models import (
    AnalyzerConfig,
    AnnotatorConfig,
    LoggingConfig,
    PatchCovConfig,
    ReportConfig,
)
from patchcov.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/patchcov/config.yaml").expanduser()
REPO_CONFIG_NAME = ".patchcov.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class _LayeredYamlSource(PydanticBaseSettingsSource):
    """Global then repo YAML, merged section by section.

    A relative ``analyzer.path`` is taken relative to the repository root,
    not the process cwd.
    """

    def __init__(self, settings_cls: type[BaseSettings], repo_root: Path) -> None:
        super().__init__(settings_cls)
        self._repo_root = repo_root
        merged: dict[str, Any] = {}
        for path in (GLOBAL_CONFIG_PATH, repo_root / REPO_CONFIG_NAME):
            merged = _deep_merge(merged, _load_yaml(path))
        self._data = self._anchor_source_root(merged)

    def _anchor_source_root(self, data: dict[str, Any]) -> dict[str, Any]:
        analyzer = data.get("analyzer")
        if not isinstance(analyzer, dict) or not analyzer.get("path"):
            return data
        path = Path(str(analyzer["path"])).expanduser()
        if not path.is_absolute():
            path = self._repo_root / path
        return {**data, "analyzer": {**analyzer, "path": str(path)}}

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _settings_for(repo_root: Path) -> type[BaseSettings]:
    """Settings class bound to one repository's YAML layers."""

    class PatchCovSettings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="PATCHCOV__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        analyzer: AnalyzerConfig = AnalyzerConfig()
        annotator: AnnotatorConfig = AnnotatorConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _LayeredYamlSource(settings_cls, repo_root))

    return PatchCovSettings


def load_config(repo_root: Path | None = None, **kwargs: Any) -> PatchCovConfig:
    """Resolve patchcov's configuration for a repository.

    Args:
        repo_root: Directory holding .patchcov.yaml. Defaults to cwd.
        **kwargs: Section overrides, e.g. ``annotator={"level": "error"}``.

    Raises:
        ConfigError: On invalid YAML or a value that fails validation.
    """
    settings_cls = _settings_for(repo_root or Path.cwd())
    try:
        return settings_cls(**kwargs)  # type: ignore[return-value]
    except ValidationError as e:
        raise ConfigError.from_validation(e) from e
