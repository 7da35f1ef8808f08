"""
Module: config

Purpose:
    Session configuration for the survey engine. Immutable dataclass with
    validation on construction, loadable from a YAML file.

Key Classes:
    - EngineConfig: Where and whether progress is saved, and the share URL

Key Functions:
    - load_config: Read an EngineConfig from YAML
    - build_session: Wire an engine, a store and autosave from a config
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from selfassess.engine import SurveyEngine
from selfassess.errors import SurveyError
from selfassess.storage import (
    DEFAULT_STORAGE_KEY,
    JsonFileStore,
    MemoryStore,
    PersistentSurvey,
    is_valid_storage_key,
)


class ConfigError(SurveyError):
    """Raised when a configuration file or mapping is invalid."""
    pass


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for one survey session (immutable).

    Attributes:
        storage_key: Key under which progress is saved
        storage_dir: Directory for JSON snapshots; None keeps progress in memory
        share_url: URL offered when sharing the survey
        autosave: Save after every answer, navigation and reset
        restore_on_start: Restore saved progress when the session is built
    """

    storage_key: str = DEFAULT_STORAGE_KEY
    storage_dir: Optional[Path] = None
    share_url: Optional[str] = None
    autosave: bool = True
    restore_on_start: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not is_valid_storage_key(self.storage_key):
            raise ConfigError(
                f"storage_key must be letters, digits, '_', '.' or '-': {self.storage_key!r}"
            )
        if self.storage_dir is not None and not isinstance(self.storage_dir, Path):
            object.__setattr__(self, "storage_dir", Path(self.storage_dir))
        if not isinstance(self.autosave, bool):
            raise ConfigError(f"autosave must be a boolean: {self.autosave!r}")
        if not isinstance(self.restore_on_start, bool):
            raise ConfigError(f"restore_on_start must be a boolean: {self.restore_on_start!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storage_key": self.storage_key,
            "storage_dir": str(self.storage_dir) if self.storage_dir is not None else None,
            "share_url": self.share_url,
            "autosave": self.autosave,
            "restore_on_start": self.restore_on_start,
        }


def load_config(path: Union[str, Path]) -> EngineConfig:
    """
    Read an EngineConfig from a YAML file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file is not a YAML mapping or has bad values
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return EngineConfig.from_dict(data)


def build_session(config: Optional[EngineConfig] = None,
                  engine: Optional[SurveyEngine] = None) -> PersistentSurvey:
    """Create an engine bound to the configured store, restoring saved progress."""
    config = config or EngineConfig()
    engine = engine or SurveyEngine()
    store = JsonFileStore(config.storage_dir) if config.storage_dir is not None else MemoryStore()
    session = PersistentSurvey(engine, store, key=config.storage_key, autosave=config.autosave)
    if config.restore_on_start:
        session.load()
    return session
