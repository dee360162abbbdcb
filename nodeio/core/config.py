from typing import Any
import json
import os
from pydantic import BaseModel, Field
from loguru import logger
from .events import Signal


# --- Settings Models ---
class GeneralSettings(BaseModel):
    debug_mode: bool = True
    log_dir: str = "logs"
    log_to_file: bool = False


class UndoSettings(BaseModel):
    max_history: int = Field(default=100, ge=1)


class GraphSettings(BaseModel):
    # Reject edges whose output type is not in the input's accepted set
    enforce_type_compatibility: bool = True


class NodeIOConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    undo: UndoSettings = Field(default_factory=UndoSettings)
    graph: GraphSettings = Field(default_factory=GraphSettings)


# --- Manager ---
class ConfigManager:
    """
    Manages configuration with persistence and reactivity.

    Pass ``filepath=None`` for an in-memory configuration that never touches
    the disk (scripting and tests).
    """
    def __init__(self, filepath: str | None = "nodeio.json"):
        self.filepath = filepath
        self._data = NodeIOConfig()
        self.on_changed = Signal("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> NodeIOConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if not hasattr(section_obj, key):
            raise ValueError(f"Invalid key: {key} in section {section}")

        # Round-trip through the model so constraints are enforced
        validated = type(section_obj).model_validate({**section_obj.model_dump(), key: value})
        setattr(self._data, section, validated)
        self._save()
        self.on_changed.emit(section, key, getattr(validated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = NodeIOConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
