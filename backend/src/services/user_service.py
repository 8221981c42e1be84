"""Service layer for users."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserCreate


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """
    Create a user.

    Raises:
        sqlalchemy.exc.IntegrityError: if the email or username is already taken.
    """
    user = User(
        email=data.email,
        username=data.username,
        given_name=data.given_name,
        family_name=data.family_name,
        full_name=data.full_name or f"{data.given_name} {data.family_name}",
        password=data.password,
    )
    db.add(user)
    await db.flush()
    return user


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Get a user by their unique username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()
