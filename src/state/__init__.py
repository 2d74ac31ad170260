from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import ConnectionSession
from .history import ConversationHistory

__all__ = ["AppSettings", "ConnectionSession", "ConversationHistory", "RuntimeDeps"]
