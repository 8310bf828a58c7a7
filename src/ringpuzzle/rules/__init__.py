"""Rule sets. Importing this package registers them."""

from ringpuzzle.rules.origami import OrigamiRules, OrigamiRulesConfig

__all__ = ["OrigamiRules", "OrigamiRulesConfig"]
