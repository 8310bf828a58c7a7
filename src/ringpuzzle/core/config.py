"""
Configuration management for ringpuzzle.

This module handles loading and validation of YAML configuration files and
provides typed configuration objects.
"""

import os
import yaml
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from pathlib import Path

from ringpuzzle.core.registry import RULES_CONFIG_REGISTRY


@dataclass
class BoardConfig:
    """Board shape and move timing hints passed on to animation consumers."""
    ring_count: int = 4
    move_time: float = 0.3   # seconds per step of a player move
    wait_time: float = 0.05  # pause between steps of a repeated move
    undo_time: float = 0.1   # seconds per step when undoing or auto-solving

    def __post_init__(self):
        if not isinstance(self.ring_count, int) or self.ring_count < 1:
            raise ValueError("ring_count must be a positive integer")
        for name in ("move_time", "wait_time", "undo_time"):
            value = getattr(self, name)
            if not isinstance(value, (float, int)) or value < 0:
                raise ValueError(f"{name} must be a non-negative number")


@dataclass
class RulesConfig:
    """Configuration for a rule set."""
    type: str = "origami"

    @classmethod
    def from_dict(cls, rules_data: Dict[str, Any]) -> "RulesConfig":
        config_type = rules_data.get("type", "origami")
        config_cls = RULES_CONFIG_REGISTRY.get(config_type, RulesConfig)
        return config_cls(**rules_data)


@dataclass
class EnvironmentConfig:
    """Configuration for the tool environment."""
    type: str = "ring_puzzle"
    max_steps: int = 100
    seed: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.max_steps, int) or self.max_steps <= 0:
            raise ValueError("max_steps must be a positive integer")


@dataclass
class LoggingConfig:
    """Where and how session history is written."""
    experiment_name: str = "ring_puzzle"
    log_dir: str = "logs"
    save_history: bool = False
    verbose: bool = False

    def __post_init__(self):
        # Directory creation is deferred to SessionLogger to avoid side effects on import
        if not isinstance(self.log_dir, str) or not self.log_dir:
            raise ValueError("log_dir must be a non-empty string")


@dataclass
class Config:
    """Main configuration object."""
    board: BoardConfig = field(default_factory=BoardConfig)
    rules: RulesConfig = field(default_factory=lambda: RulesConfig.from_dict({}))
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        board = BoardConfig(**data.get("board", {}))
        rules = RulesConfig.from_dict(data.get("rules", {}))
        environment = EnvironmentConfig(**data.get("environment", {}))
        logging = LoggingConfig(**data.get("logging", {}))

        return cls(
            board=board,
            rules=rules,
            environment=environment,
            logging=logging,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "board": {**self.board.__dict__},
            "rules": {**self.rules.__dict__},
            "environment": {**self.environment.__dict__},
            "logging": {**self.logging.__dict__},
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If required fields are missing or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "config.yaml") -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config

    Returns:
        Default Config object
    """
    config = Config()

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    issues = []

    from ringpuzzle.core.registry import RULES_REGISTRY
    if config.rules.type not in RULES_REGISTRY:
        issues.append(f"ERROR: Unknown rules type '{config.rules.type}'")

    if config.board.ring_count < 2:
        issues.append("ERROR: A one-ring board is solved after any scramble; use at least 2 rings")

    max_sets = getattr(config.rules, "max_sets", None)
    if max_sets is not None and max_sets > 12:
        issues.append("ERROR: max_sets cannot exceed the 12 angular positions of the board")

    max_moves = getattr(config.rules, "max_moves", None)
    if max_moves is not None and max_moves > 20:
        issues.append("WARNING: max_moves above 20 produces puzzles that are very hard to solve by hand")

    if config.logging.save_history and os.path.exists(config.logging.log_dir) \
            and not os.path.isdir(config.logging.log_dir):
        issues.append(f"ERROR: log_dir exists and is not a directory: {config.logging.log_dir}")

    return issues
