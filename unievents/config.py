from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from unievents import utils


class Config(BaseModel):
    """Configuration data for a university events session."""

    data_directory: Path = Field(
        Path("data"), description="Directory holding the event and settings files."
    )
    events_file: str = Field("events.dat", description="Event file name.")
    settings_file: str = Field(
        "settings.yaml", description="Settings file name (theme preference)."
    )
    username: str = Field("Group1", description="Coordinator username.")
    password: str = Field("admin123", description="Coordinator password.")
    notify_minutes_before: int = Field(
        10, ge=0, description="Notify when an event starts within this many minutes."
    )
    notify_interval_seconds: float = Field(
        60, gt=0, description="Seconds between upcoming-event checks."
    )
    notify_initial_delay_seconds: float = Field(
        10, ge=0, description="Seconds before the first upcoming-event check."
    )
    event_names: list[str] = Field(
        default_factory=lambda: list(utils.EVENT_NAMES),
        description="Event names offered by the form.",
    )
    venues: list[str] = Field(
        default_factory=lambda: list(utils.VENUES), description="Venue choices."
    )
    organizers: list[str] = Field(
        default_factory=lambda: list(utils.ORGANIZERS), description="Organizer choices."
    )
    categories: list[str] = Field(
        default_factory=lambda: list(utils.CATEGORIES), description="Category choices."
    )
    name_categories: dict[str, str] = Field(
        default_factory=lambda: dict(utils.NAME_CATEGORY_MAP),
        description="Category auto-selected for each event name.",
    )

    @property
    def events_path(self) -> Path:
        return self.data_directory / self.events_file

    @property
    def settings_path(self) -> Path:
        return self.data_directory / self.settings_file


def resolve_config_paths(config_data: dict, config_path: Path) -> dict:
    """Resolve a relative data directory against the configuration file directory.

    Args:
        config_data: Raw configuration dictionary.
        config_path: Path to the configuration file.

    Returns:
        dict: Configuration data with resolved paths.
    """
    if not config_data or not config_path:
        return config_data or {}

    resolved_data = dict(config_data)
    value = resolved_data.get("data_directory")
    if value:
        path = Path(value)
        if not path.is_absolute():
            resolved_data["data_directory"] = str(
                (config_path.parent / path).resolve()
            )
    return resolved_data


def load_config(config_path: Path | None) -> Config:
    """Load a YAML configuration file, or the defaults when no path is given.

    Args:
        config_path: Path to the YAML file, or None.

    Returns:
        Config: Validated configuration.
    """
    if config_path is None:
        return Config()
    config_path = Path(config_path)
    with open(config_path, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file) or {}
    if not isinstance(config_data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return Config(**resolve_config_paths(config_data, config_path))
