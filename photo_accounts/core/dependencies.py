"""Wiring of the user service to its configured collaborators."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from photo_accounts.core.config import settings
from photo_accounts.core.database import db_manager
from photo_accounts.core.security import BcryptCryptoRepository
from photo_accounts.repositories.memory import InMemoryUserRepository
from photo_accounts.repositories.user_repository import UserRepository
from photo_accounts.services.user_service import UserService

logger = logging.getLogger(__name__)

_memory_user_repository = InMemoryUserRepository()


@asynccontextmanager
async def user_service_scope() -> AsyncIterator[UserService]:
    """
    Yield a UserService bound to the store selected by USER_STORE.

    With the postgres store the service shares one session, committed when
    the block exits cleanly and rolled back otherwise.
    """
    crypto_repository = BcryptCryptoRepository()

    if settings.USER_STORE == "memory":
        yield UserService(_memory_user_repository, crypto_repository)
        return

    db_manager.init_from_settings(settings)
    if not await db_manager.check_connection():
        raise RuntimeError("Database is unreachable, check the DB_* settings")

    async with db_manager.session_scope() as session:
        yield UserService(UserRepository(session), crypto_repository)
