"""
ringpuzzle: a concentric ring sliding puzzle

Pieces sit on a board of concentric rings with twelve positions each. A move
either spins one ring or shifts one column (two opposite positions) through
every ring. Puzzles are built solved, grouped in columns and 2x2 squares, and
scrambled with a few random moves; the scramble is kept so the puzzle can be
unscrambled automatically.

Example Usage:
```python
from ringpuzzle import PuzzleSession

session = PuzzleSession()
session.new_puzzle(seed=42)
session.request_spin(1, True)
session.undo()
session.solve()
assert session.check_solve()
```

Command-line Usage:
```bash
ringpuzzle play --seed 42
ringpuzzle scramble --moves 5
ringpuzzle validate-config config.yaml
```
"""

# Normal imports instead of lazy loading to ensure proper registry initialization
from ringpuzzle.core.config import Config, load_config, validate_config
from ringpuzzle.session import PuzzleSession
import ringpuzzle.rules  # noqa: F401
import ringpuzzle.environment  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "PuzzleSession",
]
