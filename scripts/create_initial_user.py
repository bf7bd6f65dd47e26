"""Utility script to create the initial operator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from bulletin.application.use_cases.users import create_user
from bulletin.domain.entities import APPROVAL_STATUS_APPROVED, ROLE_ADMIN, ROLE_MEMBER
from bulletin.infrastructure.database import SessionLocal, initialize_database
from bulletin.infrastructure.repositories import UserRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create the initial administrator for the Bulletin service.",
    )
    parser.add_argument(
        "--first-name",
        default="Administrador",
        help="Nombre del usuario (por defecto: Administrador)",
    )
    parser.add_argument(
        "--last-name",
        default=None,
        help="Apellido del usuario (opcional)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Correo electrónico del usuario (por defecto: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Contraseña del usuario. Si no se proporciona se solicitará interactivamente.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an approved administrator using the provided arguments."""

    args = parse_args()

    password = args.password or getpass("Ingrese la contraseña del usuario: ")
    if not password:
        raise SystemExit("No se proporcionó una contraseña válida.")

    initialize_database()

    session = SessionLocal()
    try:
        repository = UserRepository(session)
        repository.ensure_role(ROLE_ADMIN, "Administrador")
        repository.ensure_role(ROLE_MEMBER, "Miembro")
        user = create_user(
            session,
            email=args.email,
            password=password,
            first_name=args.first_name,
            last_name=args.last_name,
            role_alias=ROLE_ADMIN,
            approval_status=APPROVAL_STATUS_APPROVED,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo crear el usuario: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar el usuario en la base de datos: {exc}") from exc
    else:
        print(
            "Usuario creado exitosamente:\n"
            f"  ID: {user.id}\n"
            f"  Email: {user.email}\n"
            f"  Rol: {user.role.alias}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
