"""Core interfaces/abstractions.

Why:
- Contracts (Protocol) that concrete adapters implement.
- The core depends on abstractions, never on httpx.
"""
