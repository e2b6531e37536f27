#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with user accounts and sample catalogue data.

USAGE:
    # From the project root with the virtualenv activated
    SEED_ADMIN_PASSWORD=... python scripts/seed_data.py

    # Keep existing rows
    SEED_ADMIN_PASSWORD=... python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing books and authors (unless --keep)
3. Creates the Administrator and Customer accounts if missing
4. Creates sample authors and books

Administrator accounts can only be created here; the public
registration endpoint always grants the Customer role.
"""

import argparse
import os
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Author, Book, Role, User
from app.services.security import hash_password


def clear_data(db: Session) -> None:
    """Clear existing catalogue data. User accounts are kept."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def ensure_user(db: Session, email: str, password: str, roles: list[Role]) -> User:
    """Create a user with the given roles unless the email is already taken."""
    user = db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()
    if user is not None:
        print(f"User {email} already exists, skipping.")
        return user

    user = User(
        email=email.lower(),
        hashed_password=hash_password(password),
        roles=",".join(role.value for role in roles),
        is_active=True,
    )
    db.add(user)
    db.commit()
    print(f"Created user {email} ({user.roles}).")
    return user


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors, keyed by last name."""
    print("Creating authors...")
    authors_data = [
        {
            "first_name": "George",
            "last_name": "Orwell",
            "bio": "English novelist and essayist, journalist and critic. "
                   "Best known for '1984' and 'Animal Farm'.",
        },
        {
            "first_name": "Jane",
            "last_name": "Austen",
            "bio": "English novelist known for her six major novels which critique "
                   "the British landed gentry at the end of the 18th century.",
        },
        {
            "first_name": "Isaac",
            "last_name": "Asimov",
            "bio": "American writer and professor of biochemistry. "
                   "Known for his works of science fiction and popular science.",
        },
    ]

    authors = {}
    for data in authors_data:
        author = Author(**data)
        db.add(author)
        authors[data["last_name"]] = author

    db.commit()
    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books linked to their authors."""
    print("Creating books...")

    books_data = [
        {
            "title": "1984",
            "year": 1949,
            "isbn": "9780451524935",
            "summary": "A dystopian novel set in a totalitarian society under constant surveillance.",
            "image": "1984.jpg",
            "price": Decimal("12.99"),
            "author": "Orwell",
        },
        {
            "title": "Animal Farm",
            "year": 1945,
            "isbn": "9780451526342",
            "summary": "An allegorical novella reflecting events leading up to the Russian Revolution.",
            "price": Decimal("9.99"),
            "author": "Orwell",
        },
        {
            "title": "Pride and Prejudice",
            "year": 1813,
            "isbn": "9780141439518",
            "summary": "A romantic novel following the emotional development of Elizabeth Bennet.",
            "price": Decimal("8.99"),
            "author": "Austen",
        },
        {
            "title": "Foundation",
            "year": 1951,
            "isbn": "9780553293357",
            "summary": "The first novel in the Foundation series about the fall of the Galactic Empire.",
            "price": Decimal("15.99"),
            "author": "Asimov",
        },
    ]

    books = []
    for data in books_data:
        author = authors[data.pop("author")]
        book = Book(**data, author_id=author.id)
        db.add(book)
        books.append(book)

    db.commit()
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing books and authors first.
    """
    admin_email = os.environ.get("SEED_ADMIN_EMAIL", "admin@bookstore.com")
    admin_password = os.environ.get("SEED_ADMIN_PASSWORD")
    customer_email = os.environ.get("SEED_CUSTOMER_EMAIL", "customer@bookstore.com")
    customer_password = os.environ.get("SEED_CUSTOMER_PASSWORD")

    if not admin_password:
        sys.exit("SEED_ADMIN_PASSWORD must be set")

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        ensure_user(db, admin_email, admin_password, [Role.ADMINISTRATOR])
        if customer_password:
            ensure_user(db, customer_email, customer_password, [Role.CUSTOMER])

        authors = create_authors(db)
        books = create_books(db, authors)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"\nYou can now access the API at http://localhost:8001")
        print(f"API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the BookStore database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing books and authors instead of clearing them",
    )
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
