"""Compiler engine components.

- parser / vocabulary: reading YAML and the controlled word lists
- validator / validators: per-level checks producing ValidationResult
- migration: upgrading games to a higher level
- scaffolding / patterns: guided fixes for compile errors
- preview: debounced live recompilation

Import directly from submodules:
    from gamespeak.engine.validator import compile_game
    from gamespeak.engine.preview import LivePreview
"""
