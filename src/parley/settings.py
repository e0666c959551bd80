"""Composer settings and enhancer configuration.

Runtime settings come from ``PARLEY_*`` environment variables (a ``.env``
file is honoured). Slash commands and contributors are declared in a JSON
file, for example::

    {
      "slashCommands": [
        {"command": "mod", "description": "Submit a question to the moderator", "value": "/mod "}
      ],
      "contributors": ["Alice", "Bob"]
    }
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from parley.application.enhancers import SlashCommand
from parley.logger import get_logger
from parley.utils import env_flag, get_package_root

logger = get_logger("settings")


@dataclass
class ComposerConfig:
    """Runtime configuration of the composer and its menu."""

    # Re-run trigger detection when only the caret moves
    detect_on_caret_move: bool = False

    # Menu geometry (terminal cells)
    menu_max_height: int = 8
    menu_min_width: int = 28
    menu_gap: int = 0

    # Logging
    log_level: str = "INFO"
    console_log: bool = False

    # Author line shown above the composer
    pseudonym: str = "You"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "ComposerConfig":
        """Build a config from ``PARLEY_*`` environment variables."""
        if load_dotenv_file:
            load_dotenv()

        defaults = cls()
        return cls(
            detect_on_caret_move=env_flag(
                os.getenv("PARLEY_DETECT_ON_CARET_MOVE"), defaults.detect_on_caret_move
            ),
            menu_max_height=_env_int("PARLEY_MENU_MAX_HEIGHT", defaults.menu_max_height),
            menu_min_width=_env_int("PARLEY_MENU_MIN_WIDTH", defaults.menu_min_width),
            menu_gap=_env_int("PARLEY_MENU_GAP", defaults.menu_gap),
            log_level=os.getenv("PARLEY_LOG_LEVEL", defaults.log_level).upper(),
            console_log=env_flag(os.getenv("PARLEY_CONSOLE_LOG"), defaults.console_log),
            pseudonym=os.getenv("PARLEY_PSEUDONYM", defaults.pseudonym),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}; using {default}")
        return default


class SlashCommandConfig(BaseModel):
    """One slash command entry of the enhancer configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    command: str = Field(..., min_length=1, description="Command text without the slash")
    description: str = Field("", description="What the command does")
    value: Optional[str] = Field(None, description="Text inserted on selection")
    conversation_types: list[str] = Field(
        default_factory=list,
        alias="conversationTypes",
        description="Conversation types the command is offered in (empty = all)",
    )

    def to_command(self) -> SlashCommand:
        return SlashCommand(
            command=self.command,
            description=self.description,
            value=self.value,
            conversation_types=tuple(self.conversation_types),
        )


class EnhancersConfig(BaseModel):
    """Slash commands and contributors offered by the composer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slash_commands: list[SlashCommandConfig] = Field(default_factory=list, alias="slashCommands")
    contributors: list[str] = Field(default_factory=list)

    def commands(self) -> list[SlashCommand]:
        return [entry.to_command() for entry in self.slash_commands]


def default_enhancers_config_path() -> Path:
    return Path(get_package_root()) / "config" / "parley_enhancers.json"


def load_enhancers_config(config_path: Optional[str | Path] = None) -> EnhancersConfig:
    """
    Load the enhancer configuration from a JSON file.

    Args:
        config_path: Path to the JSON file. Defaults to
            ``config/parley_enhancers.json`` inside the package.

    Returns:
        EnhancersConfig: Parsed configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If the configuration structure is invalid
    """
    config_path = Path(config_path) if config_path is not None else default_enhancers_config_path()

    if not config_path.exists():
        error_msg = f"Enhancer configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading enhancer configuration from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise

    try:
        config = EnhancersConfig.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid configuration structure in {config_path}: {e}")
        raise

    logger.info(
        f"Loaded {len(config.slash_commands)} slash command(s) and "
        f"{len(config.contributors)} contributor(s)"
    )
    return config
