"""Shared API dependencies for authentication and service construction."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from chat_app.core.security import JWTError, decode_access_token
from chat_app.core.settings import Settings, get_settings
from chat_app.db.session import get_db
from chat_app.repositories import MessageRepository, UserRepository
from chat_app.services.message_service import MessageService
from chat_app.services.profile_service import ProfileService
from chat_app.services.validation import PayloadValidator

# HTTP Bearer scheme for JWT authentication; missing headers are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the user id carried by the bearer token.

    The id is taken from the token as-is; whether it names an existing user is
    checked by the services that need it.

    Raises:
        HTTPException: If the token is missing or invalid.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        return decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _unauthorized("Could not validate credentials") from err


def get_validator(request: Request) -> PayloadValidator:
    """Return the validator built when the application was created."""
    validator: PayloadValidator = request.app.state.validator
    return validator


async def get_raw_body(request: Request) -> bytes:
    """Return the request body bytes for explicit validation."""
    return await request.body()


def get_message_service(db: SessionDep, settings: SettingsDep) -> MessageService:
    """Build a message service bound to the request's session."""
    return MessageService(
        MessageRepository(db, settings.persistence_read_retries),
        UserRepository(db, settings.persistence_read_retries),
        limit=settings.message_list_limit,
        join_strategy=settings.message_join_strategy,
        malformed_policy=settings.malformed_message_policy,
    )


def get_profile_service(db: SessionDep, settings: SettingsDep) -> ProfileService:
    """Build a profile service bound to the request's session."""
    return ProfileService(UserRepository(db, settings.persistence_read_retries))


CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]
ValidatorDep = Annotated[PayloadValidator, Depends(get_validator)]
RawBodyDep = Annotated[bytes, Depends(get_raw_body)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
