"""Content moderation adapter."""

from .spam import HeuristicContentPolicy

__all__ = ["HeuristicContentPolicy"]
