"""Loading of reporter settings from YAML files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from list_test_reporter.models.settings import ReporterSettings

SETTINGS_SECTION = "reporter"


def load_settings(path: Path) -> ReporterSettings:
    """Load reporter settings from the ``reporter`` section of a YAML file.

    Args:
        path: Path to the settings file

    Returns:
        Parsed settings; keys missing from the file stay unconfigured

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML or fails validation

    """
    if not path.is_file():
        raise FileNotFoundError(f"Settings file not found: {path}")

    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        raise ValueError(f"Empty settings file: {path}")
    if not isinstance(content, dict):
        raise ValueError(f"Invalid settings schema in {path}: expected a mapping")

    try:
        return ReporterSettings.model_validate(content.get(SETTINGS_SECTION) or {})
    except ValidationError as e:
        raise ValueError(f"Invalid settings schema in {path}: {e}") from e
