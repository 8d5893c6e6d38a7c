from .bus import LEVELS, MessageBus
from .protocols import Renderer

__all__ = ["LEVELS", "MessageBus", "Renderer"]
