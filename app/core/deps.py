import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client
from supabase_auth import UserResponse

from app.core.database import get_db
from app.core.errors import Unauthenticated
from app.core.supabase_client import get_auth_client

log = logging.getLogger(__name__)

security = HTTPBearer(
    scheme_name="Access Token",
    auto_error=False,
)

Database = Annotated[Client, Depends(get_db)]
AuthClient = Annotated[Client, Depends(get_auth_client)]


class CurrentUser(BaseModel):
    id: UUID
    email: str


async def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Database,
) -> CurrentUser | None:
    """Resolve the bearer token to a user, or None when there is no valid session.

    Handlers decide for themselves when a missing session becomes a 401, so
    that routes with a fixed check order can look up the resource first.
    """
    if credentials is None:
        return None

    try:
        user_response: UserResponse = db.auth.get_user(credentials.credentials)
    except Exception as e:
        log.info("Rejected access token: %s", e)
        return None

    if not user_response or not user_response.user:
        return None

    return CurrentUser(
        id=UUID(user_response.user.id), email=user_response.user.email
    )


OptionalUser = Annotated[CurrentUser | None, Depends(get_current_session)]


async def get_current_user(session: OptionalUser) -> CurrentUser:
    if session is None:
        raise Unauthenticated()
    return session


AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
