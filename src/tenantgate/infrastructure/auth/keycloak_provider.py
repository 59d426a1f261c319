"""Keycloak OIDC provider for access token introspection."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated principal. user_id is the token subject and the User id."""

    user_id: str
    email: str | None
    username: str | None
    realm_roles: list[str] = field(default_factory=list)


class KeycloakProvider:
    """Keycloak OIDC - introspects bearer tokens and extracts the principal."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token; None if it is inactive or Keycloak rejects it."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return OIDCUser(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
