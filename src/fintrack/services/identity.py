"""Identity resolution for messages that arrive without a user.

Production callers pass the user identity from the triggering request.
Simulated traffic (mock SMS, the periodic runner) is attributed to a user
chosen uniformly at random from a bounded candidate set.
"""

import random
from typing import Protocol
from uuid import UUID

from fintrack.config import settings
from fintrack.repositories.user import UserRepository


class IdentityResolver(Protocol):
    async def select(self) -> UUID | None: ...


class RandomUserSelector:
    """Uniform random choice among the first ``limit`` active users."""

    def __init__(
        self,
        user_repo: UserRepository,
        rng: random.Random | None = None,
        limit: int | None = None,
    ):
        self.user_repo = user_repo
        self.rng = rng or random.Random()
        self.limit = limit or settings.identity_candidate_limit

    async def select(self) -> UUID | None:
        candidates = await self.user_repo.get_candidate_ids(limit=self.limit)
        if not candidates:
            return None
        return self.rng.choice(candidates)
