"""
Core modules for ringpuzzle.

This package contains the fundamental components:
- Base classes for rule sets and tool environments
- Configuration management
- Registry for component discovery
"""

from ringpuzzle.core.base import (
    Action,
    State,
    Observation,
    BaseRules,
    BaseEnvironment,
)

from ringpuzzle.core.config import Config, load_config, create_default_config, validate_config, BoardConfig, RulesConfig, EnvironmentConfig, LoggingConfig

from ringpuzzle.core.registry import register_rules, register_rules_config, register_environment, RULES_REGISTRY, RULES_CONFIG_REGISTRY, ENVIRONMENT_REGISTRY

__all__ = [
    "Action",
    "State",
    "Observation",
    "BaseRules",
    "BaseEnvironment",
    "Config",
    "load_config",
    "create_default_config",
    "validate_config",
    "BoardConfig",
    "RulesConfig",
    "EnvironmentConfig",
    "LoggingConfig",
    "register_rules",
    "register_rules_config",
    "register_environment",
    "RULES_REGISTRY",
    "RULES_CONFIG_REGISTRY",
    "ENVIRONMENT_REGISTRY",
]
