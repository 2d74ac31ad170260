"""Runtime package.

Keep this module dependency-light: importing `src.runtime.*` in tooling and unit
tests should not open any provider connection.
"""

__all__: list[str] = []
