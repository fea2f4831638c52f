from .task import Task, same_task

__all__ = ["Task", "same_task"]
