from .bridge import RealtimeBridge
from .envelope import ClientChannel
from .pipeline import ConversationPipeline

__all__ = ["ClientChannel", "ConversationPipeline", "RealtimeBridge"]
