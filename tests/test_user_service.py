import pytest

from exceptions import AuthenticationError, DuplicateError, ValidationError
from services.user_service import UserService


class InMemoryUserRepository:

    def __init__(self):
        self.users = {}

    def add(self, user):
        user.id = len(self.users) + 1
        self.users[user.email] = user
        return user

    def get_by_email(self, email):
        return self.users.get(email)

    def get_all(self):
        return list(self.users.values())


@pytest.fixture
def service():
    service = UserService(pool=None)
    service.repo = InMemoryUserRepository()
    return service


def test_register_stores_hash_not_password(service):
    user = service.register("Ana", "Ana@Example.com", "hunter22")

    assert user.id == 1
    assert user.email == "ana@example.com"
    assert user.password_hash != "hunter22"
    assert user.to_public_dict() == {
        "id": 1, "name": "Ana", "email": "ana@example.com", "role": "user", "points": 0,
    }


def test_register_duplicate_email(service):
    service.register("Ana", "ana@example.com", "hunter22")

    with pytest.raises(DuplicateError):
        service.register("Other", "ana@example.com", "whatever1")


def test_register_short_password(service):
    with pytest.raises(ValidationError):
        service.register("Ana", "ana@example.com", "123")


def test_login(service):
    service.register("Ana", "ana@example.com", "hunter22")

    assert service.login("ana@example.com", "hunter22").name == "Ana"
    with pytest.raises(AuthenticationError):
        service.login("ana@example.com", "wrong-pass")
    with pytest.raises(AuthenticationError):
        service.login("nobody@example.com", "hunter22")
