from .events import RecognitionEvents
from .synthesis import SynthesisProvider
from .generation import GenerationProvider
from .recognition import RecognitionProvider

__all__ = ["GenerationProvider", "RecognitionEvents", "RecognitionProvider", "SynthesisProvider"]
