"""Use case for registering directory members."""

from sqlalchemy.orm import Session

from bulletin.domain.entities import APPROVAL_STATUS_PENDING, User
from bulletin.infrastructure.repositories import UserRepository
from bulletin.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    role_alias: str,
    last_name: str | None = None,
    business_name: str | None = None,
    approval_status: str = APPROVAL_STATUS_PENDING,
) -> User:
    """Create a new member ensuring unique email addresses."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        raise ValueError("El correo electrónico ya está registrado")

    role = repository.get_role_by_alias(role_alias)
    if role is None:
        raise ValueError("Rol no encontrado")

    user = User(
        id=None,
        role=role,
        email=email.strip().lower(),
        password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        business_name=business_name,
        approval_status=approval_status,
    )
    return repository.create(user)
