"""Strongly typed identifiers for discussion domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Comments are numbered by the store in insertion order
CommentId = NewType("CommentId", int)

# Catalog item (texture pack) a thread is attached to
SubjectId = NewType("SubjectId", int)

# Users come from the external identity provider
UserId = NewType("UserId", UUID)
