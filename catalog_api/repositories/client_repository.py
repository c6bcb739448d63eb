"""Repository for client (tenant) accounts."""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from catalog_api.core.errors import DuplicateEmailError
from catalog_api.core.security import get_password_hash
from catalog_api.models.client import Client
from catalog_api.models.user import normalize_email
from catalog_api.schemas.client import ClientCreate


class ClientRepository:
    """Repository for Client lookups and administration."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, client_id: int) -> Optional[Client]:
        return self.session.get(Client, client_id)

    def find_by_email(self, email: str) -> Optional[Client]:
        statement = select(Client).where(func.lower(Client.email) == normalize_email(email))
        return self.session.exec(statement).first()

    def find_active_by_email(self, email: str) -> Optional[Client]:
        statement = select(Client).where(
            func.lower(Client.email) == normalize_email(email),
            col(Client.is_active).is_(True),
        )
        return self.session.exec(statement).first()

    def create(self, client_in: ClientCreate) -> Client:
        """
        Register a client with a hashed password.

        Raises:
            DuplicateEmailError: Another client already uses the email
        """
        if self.find_by_email(client_in.email) is not None:
            raise DuplicateEmailError(client_in.email)

        client = Client(
            name=client_in.name,
            email=client_in.email,
            password=get_password_hash(client_in.password),
            is_active=client_in.is_active,
        )
        self.session.add(client)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEmailError(client_in.email) from exc
        self.session.refresh(client)
        return client

    def set_active(self, client: Client, active: bool) -> Client:
        client.is_active = active
        self.session.add(client)
        self.session.commit()
        self.session.refresh(client)
        return client

    def delete(self, client: Client) -> None:
        """Remove the client; its users go with it."""
        self.session.delete(client)
        self.session.commit()
