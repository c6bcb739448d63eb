"""
Load demo data: three client accounts, a phone catalog and a handful of
users per client. Safe to re-run; existing clients and users are skipped.
"""
import random
import sys
import os
import unicodedata
from decimal import Decimal

from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from catalog_api.core.errors import DuplicateEmailError
from catalog_api.db.session import engine, init_db
from catalog_api.models.product import Product
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.repositories.product_repository import ProductRepository
from catalog_api.repositories.user_repository import UserRepository
from catalog_api.schemas.client import ClientCreate
from catalog_api.schemas.product import ProductCreate
from catalog_api.schemas.user import UserCreate

DEFAULT_PASSWORD = "password123"

CLIENTS = [
    ("TechStore", "admin@techstore.com"),
    ("Shop1", "admin@shop1.com"),
    ("Shop2", "admin@shop2.com"),
]

CATALOG = {
    "Apple": ["iPhone 14", "iPhone 15", "iPhone 16"],
    "Samsung": ["Galaxy S24", "Galaxy A55", "Galaxy Note"],
    "Xiaomi": ["Redmi Note 13", "Mi 14", "POCO X6"],
    "OnePlus": ["OnePlus 12", "OnePlus 11"],
}

FIRST_NAMES = ["Camille", "Louis", "Emma", "Hugo", "Léa", "Jules", "Chloé", "Noah", "Inès", "Arthur"]
LAST_NAMES = ["Martin", "Bernard", "Dubois", "Thomas", "Robert", "Petit", "Durand", "Leroy", "Moreau", "Lefèvre"]


def ascii_email(first_name: str, last_name: str, suffix: int) -> str:
    local = unicodedata.normalize("NFKD", f"{first_name}.{last_name}{suffix}")
    return local.encode("ascii", "ignore").decode("ascii") + "@example.com"


def seed_clients(session: Session):
    repository = ClientRepository(session)
    clients = []
    for name, email in CLIENTS:
        client = repository.find_by_email(email)
        if client is None:
            client = repository.create(ClientCreate(name=name, email=email, password=DEFAULT_PASSWORD))
            print(f"Created client {email}")
        clients.append(client)
    return clients


def seed_products(session: Session, rng: random.Random) -> None:
    if session.exec(select(Product).limit(1)).first() is not None:
        print("Catalog already populated, skipping products.")
        return

    repository = ProductRepository(session)
    for brand, names in CATALOG.items():
        for name in names:
            repository.create(ProductCreate(
                name=name,
                brand=brand,
                model=f"A{rng.randint(1000, 9999)}",
                price=Decimal(rng.randint(100, 1000)),
                description=f"Smartphone {brand} avec écran haute définition et appareil photo performant.",
                specifications={
                    "screen": f"{rng.choice(['6', '7', '8'])} pouces",
                    "storage": rng.choice(["128 GB", "256 GB", "512 GB"]),
                },
            ))
    print(f"Created {sum(len(names) for names in CATALOG.values())} products")


def seed_users(session: Session, clients, rng: random.Random) -> None:
    repository = UserRepository(session)
    for client in clients:
        created = 0
        for _ in range(rng.randint(5, 10)):
            first_name = rng.choice(FIRST_NAMES)
            last_name = rng.choice(LAST_NAMES)
            email = ascii_email(first_name, last_name, rng.randint(1, 99))
            try:
                repository.create(UserCreate(first_name=first_name, last_name=last_name, email=email), client.id)
                created += 1
            except DuplicateEmailError:
                continue
        print(f"Created {created} users for {client.email}")


def seed(seed_value: int = 42) -> None:
    print("--- Seeding demo data ---")
    rng = random.Random(seed_value)
    init_db()
    with Session(engine) as session:
        clients = seed_clients(session)
        seed_products(session, rng)
        seed_users(session, clients, rng)
    print(f"Done. Every client logs in with password '{DEFAULT_PASSWORD}'.")


if __name__ == "__main__":
    seed()
