from .bus import MessageStore, MessageBus, Renderer, bus

__all__ = ["MessageStore", "MessageBus", "Renderer", "bus"]
