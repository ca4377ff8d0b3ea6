"""Vote use cases."""

from .set_vote import SetVoteRequest, SetVoteResponse, SetVoteUseCase

__all__ = [
    "SetVoteRequest",
    "SetVoteResponse",
    "SetVoteUseCase",
]
