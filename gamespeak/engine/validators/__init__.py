"""
Validators for the game compiler.

This package contains one validator per schema level.
Each validator implements the LevelValidator protocol.
"""

from gamespeak.engine.validators.level1 import Level1Validator
from gamespeak.engine.validators.level2 import Level2Validator
from gamespeak.engine.validators.level3 import Level3Validator

__all__ = ["Level1Validator", "Level2Validator", "Level3Validator"]
