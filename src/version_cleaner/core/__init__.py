"""Core of version-cleaner.

Why it lives apart:
- Decision logic (which versions go) never imports HTTP or CLI code.
- Adapters plug in through the contracts in `core.interfaces`.
"""
