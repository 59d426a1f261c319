"""Entitlement evaluator port - plan features and limits."""

from typing import Protocol

from tenantgate.domain.policies import Entitlements


class EntitlementChecker(Protocol):
    """Port for resolving a user's plan entitlements."""

    async def for_user(self, user_id: str) -> Entitlements: ...
