import logging

from fastapi import APIRouter, status
from supabase import Client
from supabase_auth.errors import AuthError, AuthRetryableError

from app.core.deps import AuthClient, AuthenticatedUser, Database
from app.core.errors import InvalidArgument, Unauthenticated, UpstreamFailure
from app.schemas.user import Token, UserCredentials, UserRegister, UserResponse

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _email_taken(db: Client, email: str) -> bool:
    result = db.table("users").select("id").eq("email", email).limit(1).execute()
    return bool(result.data)


def _is_rejection(e: AuthError) -> bool:
    """True for a 4xx answer from the auth service, False when the service itself failed."""
    if isinstance(e, AuthRetryableError):
        return False
    return 400 <= getattr(e, "status", 500) < 500


def _discard_auth_user(db: Client, user_id: str) -> None:
    try:
        db.auth.admin.delete_user(user_id)
    except Exception:
        log.exception("register rollback failed, auth account left user=%s", user_id)


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register(user: UserRegister, db: Database):
    """Create an account. The auth service stores the hashed password."""
    try:
        taken = _email_taken(db, user.email)
    except Exception:
        log.exception("register lookup failed")
        raise UpstreamFailure("Registration failed")

    if taken:
        raise InvalidArgument("Email already registered")

    try:
        created = db.auth.admin.create_user(
            {
                "email": user.email,
                "password": user.password,
                "email_confirm": True,
            }
        )
    except AuthError as e:
        if not _is_rejection(e):
            log.exception("register create_user failed")
            raise UpstreamFailure("Registration failed")
        # Covers accounts that exist in auth but not yet in users, and
        # server-side password policy
        raise InvalidArgument(e.message)
    except Exception:
        log.exception("register create_user failed")
        raise UpstreamFailure("Registration failed")

    user_id = str(created.user.id)
    try:
        result = (
            db.table("users")
            .insert({"id": user_id, "email": user.email})
            .execute()
        )
    except Exception:
        log.exception("register profile insert failed user=%s", user_id)
        # Without a users row the account could log in but never own a video
        _discard_auth_user(db, user_id)
        raise UpstreamFailure("Registration failed")

    log.info("Registered user %s", user_id)
    return UserResponse(**result.data[0])


@router.post("/login", response_model=Token)
async def login(credentials: UserCredentials, auth_client: AuthClient):
    try:
        response = auth_client.auth.sign_in_with_password(
            {"email": credentials.email, "password": credentials.password}
        )
    except AuthError as e:
        if not _is_rejection(e):
            log.exception("login failed")
            raise UpstreamFailure("Login failed")
        raise Unauthenticated("Incorrect email or password")
    except Exception:
        log.exception("login failed")
        raise UpstreamFailure("Login failed")

    if not response.session:
        raise Unauthenticated("Incorrect email or password")

    return Token(
        access_token=response.session.access_token,
        expires_in=response.session.expires_in,
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: AuthenticatedUser):
    return UserResponse(id=user.id, email=user.email)
