"""Adapter DI providers."""

from dishka import Scope, provide

from discuss.adapter.moderation import HeuristicContentPolicy
from discuss.config import ModerationSettings
from discuss.domain.service import ContentPolicy
from discuss.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Stateless adapters shared by every request - concrete, no mocks needed."""

    scope = Scope.APP

    @provide
    def get_content_policy(self, settings: ModerationSettings) -> ContentPolicy:
        """Provide the heuristic spam and profanity filter."""
        return HeuristicContentPolicy(settings)
