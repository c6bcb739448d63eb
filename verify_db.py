import sys
import os
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func
from sshtunnel import BaseSSHTunnelForwarderError

# Add current directory to path so we can import catalog_api
sys.path.append(os.getcwd())

from catalog_api.models import Client, Product, User


def verify_database():
    print("--- Database Verification ---")
    try:
        # The engine (and SSH tunnel, if enabled) is built on import
        from catalog_api.db import session as db_session
    except BaseSSHTunnelForwarderError as e:
        print("Database connection test: FAILED")
        print(f"Error: {e}")
        print("\nTIP: Make sure your SSH credentials in .env are correct and you are not blocked by a firewall.")
        sys.exit(1)

    try:
        print("Attempting to create tables...")
        db_session.init_db()
        print("Table creation/verification successful.")

        # Test session and a count per table
        with Session(db_session.engine) as session:
            for model in (Client, Product, User):
                count = session.exec(select(func.count()).select_from(model)).one()
                print(f"{model.__tablename__}: {count} rows")
            print("Database connection test: SUCCESS")

    except SQLAlchemyError as e:
        print("Database connection test: FAILED")
        print(f"Error: {e}")
        print(f"\nTIP: Ensure the database at {db_session.engine.url!r} is running and the user has correct permissions.")
        sys.exit(1)

if __name__ == "__main__":
    verify_database()
