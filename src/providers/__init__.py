from .capability import Capability
from .registry import ProviderRegistry

__all__ = ["Capability", "ProviderRegistry"]
