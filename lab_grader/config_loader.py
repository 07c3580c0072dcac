"""
Configuration loader for the Lab Grader.

Handles parsing and validation of the optional YAML configuration file.
"""

from datetime import datetime, timezone
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from .config import DEFAULT_OUTPUT_DIR, DUE_UTC, SEARCH_DEPTH, SUMMARY_ENV_VAR


class GraderConfig(BaseModel):
    """
    Configuration model for the grader.
    """
    root: Path = Field(default_factory=Path.cwd, description="Working tree to grade")
    output_dir: Path | None = Field(None, description="Directory for grade.json and grade.md (default: <root>/dist/grading)")
    due_utc: datetime = Field(DUE_UTC, description="Deadline instant")
    search_depth: int = Field(SEARCH_DEPTH, ge=0, description="Levels searched below the root for missing files")
    summary_env_var: str = Field(SUMMARY_ENV_VAR, description="Environment variable naming the CI summary file")
    verbose: bool = Field(False, description="Enable verbose output")

    @field_validator("due_utc")
    @classmethod
    def _require_offset(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("due_utc must include a UTC offset")
        return value.astimezone(timezone.utc)

    @property
    def resolved_output_dir(self) -> Path:
        output_dir = self.output_dir or DEFAULT_OUTPUT_DIR
        if not output_dir.is_absolute():
            output_dir = self.root / output_dir
        return output_dir


def load_config(config_path: Path) -> GraderConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        GraderConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        return GraderConfig(root=config_path.parent.resolve())

    # Resolve relative paths relative to the config file location
    config_dir = config_path.parent.resolve()
    config_data.setdefault("root", config_dir)
    for path_field in ["root", "output_dir"]:
        if config_data.get(path_field):
            path = Path(config_data[path_field])
            if not path.is_absolute():
                config_data[path_field] = config_dir / path

    return GraderConfig(**config_data)
