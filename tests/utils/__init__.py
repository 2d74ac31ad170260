"""Test utilities.

Focused modules:
- fakes.py: recording WebSocket and in-memory providers
- runtime.py: settings, registry and per-connection pipeline builders
"""
