"""Base model for discussion entities and read views."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for comments, votes and the views built from them.

    Instances are frozen: a changed comment or vote is a new object, and
    views handed to callers cannot be mutated behind the ranking engine.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
