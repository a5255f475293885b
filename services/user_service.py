"""
services/user_service.py
-------------------------
Business logic for user registration and login.

Passwords are never stored or compared in plain text: registration stores a
salted PBKDF2 hash and login verifies against it in constant time.
"""

from db.connection import ConnectionPool
from exceptions import AuthenticationError, DuplicateError, ValidationError
from models.user import User
from repositories.user_repo import UserRepository
from security.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Handles registration, login and user listing."""

    def __init__(self, pool: ConnectionPool):
        self.repo = UserRepository(pool)

    def register(self, name: str, email: str, password: str) -> User:
        """
        Create a new 'user' account.

        Raises:
            ValidationError: Missing name/email or a too-short password.
            DuplicateError: The email is already registered.
        """
        email = (email or "").strip().lower()
        if not name or not email:
            raise ValidationError("'name' and 'email' are required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
                field="password",
            )
        if self.repo.get_by_email(email) is not None:
            raise DuplicateError("Email already exists")

        user = User(name=name, email=email, password_hash=hash_password(password))
        return self.repo.add(user)

    def login(self, email: str, password: str) -> User:
        """
        Verify credentials.

        Raises:
            AuthenticationError: Unknown email or wrong password.
        """
        user = self.repo.get_by_email((email or "").strip().lower())
        if user is None or not verify_password(password or "", user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError()
        return user

    def list_users(self) -> list[User]:
        return self.repo.get_all()
