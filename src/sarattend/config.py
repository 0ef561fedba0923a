"""Application settings, stored in a TOML file."""

import json
import pathlib
import tomllib
from typing import Any, Optional

CONFIG_FILE_NAME = "sarattend.toml"
DATA_FILE_NAME = "sarattend_state.json"
ORGANIZATION_NAME = "Grand Forks Search and Rescue"

# Roster used the first time the application starts, or when the roster is
#   reset from the Edit List dialog.
DEFAULT_ROSTER = [
    "Andres Dean",
    "Barry Savitskoff",
    "Ben Peach",
    "Bill Sperling",
    "Brad Siemens",
    "Brennan Zorn",
    "Cavan Gates",
    "Chris Williams",
    "Christina Mavinic",
    "Clayton Marr",
    "Connie Bielert",
    "David Bryan",
    "Derek Pankoff",
    "Duke Enns",
    "Duncan Redfearn",
    "Erik Skaaning",
    "Erin Peach",
    "Graham Watt",
    "Grant Burnard",
    "Jackie Schott",
    "Jason Hall",
    "Jason Hugh",
    "Jennifer Erlendson",
    "John Wheeler",
    "John Younk",
    "Jon Wilson",
    "Justin Darbyshire",
    "Ken Lazeroff",
    "Kristina Anderson",
    "Madeline Williams",
    "Michael Slatnik",
    "Nathan Hein",
    "Nicky Winn",
    "Rebecca Massey",
    "Rocky Olsen",
    "Scott Lamont",
    "Skye Fletcher",
    "Spencer Novokshonoff",
    "Steve Danshin",
    "Trevor Carson",
    "Tyrell Polzin",
]


class ConfigError(Exception):
    """Settings file is missing or contains invalid values."""


class Settings:
    """Application settings."""

    config_path: Optional[pathlib.Path]
    """TOML file the settings were loaded from. None if using defaults."""
    data_path: pathlib.Path
    """JSON file that holds the roster, sessions, and log between runs."""
    export_folder: pathlib.Path
    """Folder where downloaded attendance logs are written."""
    organization_name: str
    """Shown in the header of exported logs."""
    default_roster: list[str]
    """Members loaded when no saved state exists."""

    def __init__(self) -> None:
        """Start with default settings."""
        self.config_path = None
        self.data_path = pathlib.Path.cwd() / DATA_FILE_NAME
        self.export_folder = pathlib.Path.cwd()
        self.organization_name = ORGANIZATION_NAME
        self.default_roster = list(DEFAULT_ROSTER)

    def load(self, config_path: pathlib.Path) -> None:
        """Read settings from a TOML file.

        Relative paths in the file are resolved against the file's folder.
        Keys that aren't recognized are ignored.
        """
        try:
            with open(config_path, "rb") as tfile:
                data = tomllib.load(tfile)
        except FileNotFoundError as err:
            raise ConfigError(f"Settings file {config_path} does not exist.") from err
        except (OSError, tomllib.TOMLDecodeError) as err:
            raise ConfigError(
                f"Unable to read settings file {config_path}: {err}"
            ) from err
        self._apply(data, config_path.parent)
        self.config_path = config_path

    def _apply(self, data: dict[str, Any], base_folder: pathlib.Path) -> None:
        """Copy values from parsed TOML data into the settings."""
        files = data.get("files", {})
        organization = data.get("organization", {})
        if "data_path" in files:
            self.data_path = self._to_path(files["data_path"], base_folder)
        if "export_folder" in files:
            self.export_folder = self._to_path(files["export_folder"], base_folder)
        if "name" in organization:
            if not isinstance(organization["name"], str):
                raise ConfigError("organization.name must be a string.")
            self.organization_name = organization["name"]
        if "roster" in organization:
            roster = organization["roster"]
            if not isinstance(roster, list) or not all(
                isinstance(name, str) for name in roster
            ):
                raise ConfigError("organization.roster must be a list of names.")
            roster = [name.strip() for name in roster]
            if not all(roster):
                raise ConfigError("organization.roster contains a blank name.")
            folded = [name.casefold() for name in roster]
            duplicates = sorted(
                {name for name in roster if folded.count(name.casefold()) > 1}
            )
            if duplicates:
                raise ConfigError(
                    "organization.roster contains duplicate names: "
                    + ", ".join(duplicates)
                )
            self.default_roster = roster

    @staticmethod
    def _to_path(value: Any, base_folder: pathlib.Path) -> pathlib.Path:
        if not isinstance(value, str):
            raise ConfigError(f"Expected a file path, got {value!r}.")
        path = pathlib.Path(value).expanduser()
        return path if path.is_absolute() else base_folder / path

    def create_new_config_file(self, config_path: pathlib.Path) -> None:
        """Write the current settings to a new TOML file."""
        if config_path.exists():
            raise ConfigError(f"Cannot create {config_path}, file already exists.")
        roster = ",\n".join(f"    {json.dumps(name)}" for name in self.default_roster)
        lines = [
            "# SAR Attend settings",
            "",
            "[files]",
            "# JSON file that holds members, sessions, and the attendance log.",
            f"data_path = {json.dumps(self.data_path.as_posix())}",
            "# Folder where attendance logs are saved.",
            f"export_folder = {json.dumps(self.export_folder.as_posix())}",
            "",
            "[organization]",
            f"name = {json.dumps(self.organization_name)}",
            "# Roster used when no saved data exists.",
            "roster = [",
            roster,
            "]",
            "",
        ]
        config_path.write_text("\n".join(lines), encoding="utf-8")


settings = Settings()
