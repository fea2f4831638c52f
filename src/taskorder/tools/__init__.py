from .visualize import visualize

__all__ = ["visualize"]
