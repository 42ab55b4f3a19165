"""
gamespeak Test Suite

Test structure:
- unit/: Test components in isolation
- integration/: Test the full text -> game -> upgrade flow
- mocks/: Fake clock for deterministic debounce timing
"""
