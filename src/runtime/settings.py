"""Load runtime settings.

Environment names and defaults live in `src/config/*`; parsing lives in
`settings_loader`. The result is a tree of frozen dataclasses built once at
startup and passed down through `RuntimeDeps`.
"""

from __future__ import annotations

from .settings_loader import load_settings

__all__ = ["load_settings"]
