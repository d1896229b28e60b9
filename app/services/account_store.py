"""Data-access layer for user accounts: validation, registration and login checks."""
import asyncio
import logging

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email_syntax
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import settings
from app.core.security import PASSWORD_SCHEMES, check_password, hash_password
from app.database import build_engine, create_tables
from app.models.user import User
from app.schemas.account import AccountData, StoreResult

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6

MSG_USERNAME_LENGTH = "El usuario debe tener entre 3 y 20 caracteres"
MSG_USERNAME_CHARSET = "El usuario solo puede contener letras y números"
MSG_USERNAME_OK = "Usuario válido"
MSG_EMAIL_INVALID = "Email inválido"
MSG_PASSWORD_LENGTH = "La contraseña debe tener al menos 6 caracteres"
MSG_PASSWORD_OK = "Contraseña válida"
MSG_REGISTERED = "Usuario registrado exitosamente"
MSG_DUPLICATE = "El usuario o email ya está registrado"
MSG_BAD_CREDENTIALS = "Usuario o contraseña incorrectos"
MSG_EMAIL_NOT_REGISTERED = "Email no registrado"
MSG_EMAIL_NOT_FOUND = "Email no encontrado"
MSG_PASSWORD_UPDATED = "Contraseña actualizada exitosamente"


def validate_username(username: str) -> tuple[bool, str]:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return False, MSG_USERNAME_LENGTH
    if not (username.isascii() and username.isalnum()):
        return False, MSG_USERNAME_CHARSET
    return True, MSG_USERNAME_OK


def validate_email(email: str) -> bool:
    try:
        check_email_syntax(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_password(password: str) -> tuple[bool, str]:
    if len(password) < PASSWORD_MIN_LENGTH:
        return False, MSG_PASSWORD_LENGTH
    return True, MSG_PASSWORD_OK


class AccountStore:
    """Mediates every read and write on the ``users`` table.

    The engine is built on first use and reused for the lifetime of the
    store. Each operation checks out its own session and issues a single
    statement. Failures come back as ``StoreResult`` values; nothing raises
    to the caller.
    """

    def __init__(self, database_url: str | None = None, password_scheme: str | None = None):
        self._database_url = database_url or settings.database_url
        if password_scheme is not None and password_scheme not in PASSWORD_SCHEMES:
            raise ValueError(f"Unknown password scheme: {password_scheme}")
        self._password_scheme = password_scheme
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        self._init_lock = asyncio.Lock()

    validate_username = staticmethod(validate_username)
    validate_email = staticmethod(validate_email)
    validate_password = staticmethod(validate_password)

    async def _get_sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is not None:
            return self._sessionmaker
        async with self._init_lock:
            if self._sessionmaker is None:
                engine = build_engine(self._database_url)
                await create_tables(engine)
                self._engine = engine
                self._sessionmaker = async_sessionmaker(
                    engine, class_=AsyncSession, expire_on_commit=False
                )
        return self._sessionmaker

    async def init(self) -> None:
        await self._get_sessionmaker()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    def _hash(self, password: str) -> str:
        return hash_password(password, self._password_scheme)

    async def register(self, username: str, email: str, password: str) -> StoreResult:
        valid, message = validate_username(username)
        if not valid:
            return StoreResult.fail(message)
        if not validate_email(email):
            return StoreResult.fail(MSG_EMAIL_INVALID)
        valid, message = validate_password(password)
        if not valid:
            return StoreResult.fail(message)

        try:
            session_maker = await self._get_sessionmaker()
            async with session_maker() as session:
                session.add(User(
                    username=username,
                    email=email,
                    password_digest=self._hash(password),
                    active=1,
                ))
                await session.commit()
        except IntegrityError:
            logger.info("Duplicate registration rejected for username=%s", username)
            return StoreResult.fail(MSG_DUPLICATE)
        except SQLAlchemyError as exc:
            logger.exception("Error registering user %s", username)
            return StoreResult.fail(f"Error al registrar usuario: {exc}")

        return StoreResult.ok(message=MSG_REGISTERED)

    async def verify(self, username: str, password: str) -> StoreResult:
        try:
            session_maker = await self._get_sessionmaker()
            async with session_maker() as session:
                result = await session.execute(
                    select(User).where(User.username == username, User.active == 1)
                )
                user = result.scalars().first()
        except SQLAlchemyError as exc:
            logger.exception("Error verifying user %s", username)
            return StoreResult.fail(f"Error al verificar usuario: {exc}")

        # Unknown user, wrong password and inactive account share one message.
        if user is None or not check_password(password, user.password_digest):
            return StoreResult.fail(MSG_BAD_CREDENTIALS)

        return StoreResult.ok(data=AccountData.model_validate(user))

    async def get_by_email(self, email: str) -> StoreResult:
        try:
            session_maker = await self._get_sessionmaker()
            async with session_maker() as session:
                result = await session.execute(
                    select(User).where(User.email == email, User.active == 1)
                )
                user = result.scalars().first()
        except SQLAlchemyError as exc:
            logger.exception("Error looking up user by email")
            return StoreResult.fail(f"Error al buscar usuario: {exc}")

        if user is None:
            return StoreResult.fail(MSG_EMAIL_NOT_REGISTERED)
        return StoreResult.ok(data=AccountData.model_validate(user))

    async def update_password(self, email: str, new_password: str) -> StoreResult:
        valid, message = validate_password(new_password)
        if not valid:
            return StoreResult.fail(message)

        try:
            session_maker = await self._get_sessionmaker()
            async with session_maker() as session:
                result = await session.execute(
                    update(User)
                    .where(User.email == email, User.active == 1)
                    .values(password_digest=self._hash(new_password))
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Error updating password")
            return StoreResult.fail(f"Error al actualizar contraseña: {exc}")

        if result.rowcount == 0:
            return StoreResult.fail(MSG_EMAIL_NOT_FOUND)
        return StoreResult.ok(message=MSG_PASSWORD_UPDATED)

    async def exists(self, username: str, email: str | None = None) -> bool:
        """Return True if any row, active or not, uses the username (or email)."""
        condition = User.username == username
        if email is not None:
            condition = or_(condition, User.email == email)

        try:
            session_maker = await self._get_sessionmaker()
            async with session_maker() as session:
                result = await session.execute(select(User.id).where(condition).limit(1))
                return result.first() is not None
        except SQLAlchemyError:
            logger.exception("Error checking whether user %s exists", username)
            return False
