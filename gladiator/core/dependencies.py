"""
gladiator/core/dependencies.py

Authentication Dependencies

Resolves the caller's identity from a bearer JWT issued by the hosted auth
provider, then joins it with the caller's profile to obtain the role:
- get_optional_identity: Identity or None (anonymous)
- get_current_identity: Identity, 401 when missing/invalid
- get_current_user: CurrentUser (identity + profile role)

Roles are always read from the stored profile, never from the token claims.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from gladiator.core.config import settings
from gladiator.core.exceptions import AuthenticationError, AuthorizationError
from gladiator.core.schemas import CurrentUser, Identity
from gladiator.database.models import PROFILES
from gladiator.database.session import get_store
from gladiator.database.store import DataStore

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> Identity:
    """
    Decode and validate a hosted-auth access token.

    Raises:
        AuthenticationError: If the token is malformed, expired or has no subject.
    """
    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE or None,
            options=options,
        )
        return Identity(id=UUID(str(payload["sub"])), email=payload.get("email"))
    except (JWTError, KeyError, ValueError) as e:
        logger.warning(f"[AUTH] JWT decoding/validation failed: {e}")
        raise AuthenticationError() from e


async def get_optional_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> Identity | None:
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


async def get_current_identity(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
) -> Identity:
    if identity is None:
        logger.debug("[AUTH] No bearer token found in Authorization header.")
        raise AuthenticationError()
    return identity


async def get_current_user(
    identity: Annotated[Identity, Depends(get_current_identity)],
    store: Annotated[DataStore, Depends(get_store)],
) -> CurrentUser:
    """
    Resolve the authenticated identity's profile role.

    Raises:
        AuthorizationError: If the identity has not registered a profile yet.
    """
    profile = await store.fetch_one(PROFILES, {"id": identity.id})
    if profile is None:
        logger.warning(f"[AUTH] Identity {identity.id} has no profile")
        raise AuthorizationError("Complete your profile registration first", code="no_profile")

    logger.debug(f"[AUTH] User {identity.id} authenticated as {profile['user_type']}")
    return CurrentUser(id=identity.id, role=profile["user_type"], email=identity.email)


StoreDep = Annotated[DataStore, Depends(get_store)]
IdentityDep = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
