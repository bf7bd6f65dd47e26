"""Shared fixtures: a throwaway SQLite database and a seeded member directory."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "bulletin_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ANNOUNCEMENT_STATS_STRATEGY"] = "grouped"

from bulletin.config import get_settings  # noqa: E402

get_settings.cache_clear()

from bulletin.domain.entities import (  # noqa: E402
    APPROVAL_STATUS_APPROVED,
    APPROVAL_STATUS_PENDING,
    APPROVAL_STATUS_REJECTED,
    ROLE_ADMIN,
    ROLE_MEMBER,
    User,
)
from bulletin.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from bulletin.infrastructure.repositories import UserRepository  # noqa: E402
from bulletin.infrastructure.security import get_password_hash  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123"
MEMBER_PASSWORD = "MemberPass123"


@dataclass
class Directory:
    """Members seeded for a test, keyed by short name."""

    admin: User
    alice: User
    bob: User
    carol: User
    dave: User
    erin: User
    admin_password: str = ADMIN_PASSWORD
    member_password: str = MEMBER_PASSWORD

    @property
    def approved(self) -> list[User]:
        return [self.admin, self.alice, self.bob, self.carol]


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


def _add_user(
    repository: UserRepository,
    *,
    role,
    email: str,
    first_name: str,
    approval_status: str,
    password: str = "!",
    last_name: str | None = None,
    business_name: str | None = None,
) -> User:
    return repository.create(
        User(
            id=None,
            role=role,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            business_name=business_name,
            approval_status=approval_status,
        )
    )


@pytest.fixture()
def directory(session) -> Directory:
    """Seed one operator, three approved members and two ineligible ones."""

    repository = UserRepository(session)
    admin_role = repository.ensure_role(ROLE_ADMIN, "Administrador")
    member_role = repository.ensure_role(ROLE_MEMBER, "Miembro")
    return Directory(
        admin=_add_user(
            repository,
            role=admin_role,
            email=ADMIN_EMAIL,
            first_name="Ada",
            last_name="Operator",
            approval_status=APPROVAL_STATUS_APPROVED,
            password=get_password_hash(ADMIN_PASSWORD),
        ),
        alice=_add_user(
            repository,
            role=member_role,
            email="alice@example.com",
            first_name="Alice",
            last_name="Adams",
            approval_status=APPROVAL_STATUS_APPROVED,
            password=get_password_hash(MEMBER_PASSWORD),
        ),
        bob=_add_user(
            repository,
            role=member_role,
            email="bob@example.com",
            first_name="Bob",
            last_name="Brown",
            approval_status=APPROVAL_STATUS_APPROVED,
        ),
        carol=_add_user(
            repository,
            role=member_role,
            email="carol@example.com",
            first_name="Carol",
            business_name="Carol's Bakery",
            approval_status=APPROVAL_STATUS_APPROVED,
        ),
        dave=_add_user(
            repository,
            role=member_role,
            email="dave@example.com",
            first_name="Dave",
            approval_status=APPROVAL_STATUS_PENDING,
        ),
        erin=_add_user(
            repository,
            role=member_role,
            email="erin@example.com",
            first_name="Erin",
            approval_status=APPROVAL_STATUS_REJECTED,
        ),
    )
