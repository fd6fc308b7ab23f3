"""Authentication service for password hashing and JWT token management."""

from datetime import datetime, timedelta
from typing import Optional
import bcrypt
from jose import JWTError, jwt
from bson import ObjectId
from bson.errors import InvalidId

from config.settings import settings
from config.database import USERS, database
from config.logging_utils import log_success
from models.user import UserCreate, UserResponse, TokenData


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_token_for_user(user: dict) -> str:
    """Issue an access token for a stored user document."""
    return create_access_token(
        data={"sub": str(user["_id"]), "email": user["email"]},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def decode_token(token: str) -> Optional[TokenData]:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user_id: str = payload.get("sub")
    if user_id is None:
        return None
    return TokenData(user_id=user_id, email=payload.get("email"))


def to_user_response(user: dict) -> UserResponse:
    """The authenticated user context passed to services."""
    return UserResponse(
        id=str(user["_id"]),
        email=user["email"],
        created_at=user["created_at"]
    )


async def get_user_by_email(email: str) -> Optional[dict]:
    """Get a user from database by email."""
    return await database.get_collection(USERS).find_one({"email": email.lower()})


async def get_user_by_id(user_id: str) -> Optional[dict]:
    """Get a user from database by ID."""
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    return await database.get_collection(USERS).find_one({"_id": oid})


async def create_user(user_data: UserCreate) -> UserResponse:
    """Create a new user in the database."""
    user_doc = {
        "email": user_data.email.lower(),
        "password_hash": hash_password(user_data.password),
        "created_at": datetime.utcnow()
    }

    result = await database.get_collection(USERS).insert_one(user_doc)
    user_doc["_id"] = result.inserted_id
    log_success(f"Registered user id={result.inserted_id}", prefix="AUTH")
    return to_user_response(user_doc)


async def authenticate_user(email: str, password: str) -> Optional[dict]:
    """Authenticate a user with email and password."""
    user = await get_user_by_email(email)
    if not user:
        return None
    if not verify_password(password, user["password_hash"]):
        return None
    return user
