import argparse
import sys
import os

from pydantic import ValidationError
from sqlmodel import Session

# Add current directory to path
sys.path.append(os.getcwd())

from catalog_api.core.errors import DuplicateEmailError, errors_from
from catalog_api.db.session import engine, init_db
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.schemas.client import ClientCreate


def create_client(name: str, email: str, password: str, active: bool = True) -> int:
    print("--- Client Creation ---")

    try:
        client_in = ClientCreate(name=name, email=email, password=password, is_active=active)
    except ValidationError as exc:
        for field, message in errors_from(exc).items():
            print(f"{field}: {message}")
        return 1

    init_db()
    with Session(engine) as session:
        try:
            client = ClientRepository(session).create(client_in)
        except DuplicateEmailError:
            print(f"Client with email {client_in.email} already exists.")
            return 1

        print("Client created successfully!")
        print(f"Id: {client.id}")
        print(f"Name: {client.name}")
        print(f"Email: {client.email}")
        print(f"Active: {client.is_active}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a client account")
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--inactive", action="store_true", help="Create the account disabled")
    args = parser.parse_args()
    sys.exit(create_client(args.name, args.email, args.password, active=not args.inactive))
