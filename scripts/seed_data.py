#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample authors and books through the repository, so
   author creation and book counts follow the same rules as addBook
4. Creates a sample user with the default credential
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog_api.config import get_settings
from catalog_api.database import SessionLocal, create_tables
from catalog_api.models import Author, Book, BookGenre, User
from catalog_api.services.repository import CatalogRepository
from catalog_api.services.security import hash_password

AUTHORS_BORN = {
    "Robert Martin": 1952,
    "Martin Fowler": 1963,
    "Fyodor Dostoevsky": 1821,
}

BOOKS = [
    {"title": "Clean Code", "published": 2008, "author": "Robert Martin",
     "genres": ["refactoring"]},
    {"title": "Agile software development", "published": 2002, "author": "Robert Martin",
     "genres": ["agile", "patterns", "design"]},
    {"title": "Refactoring, edition 2", "published": 2018, "author": "Martin Fowler",
     "genres": ["refactoring"]},
    {"title": "Refactoring to patterns", "published": 2008, "author": "Joshua Kerievsky",
     "genres": ["refactoring", "patterns"]},
    {"title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
     "published": 2012, "author": "Sandi Metz", "genres": ["refactoring", "design"]},
    {"title": "Crime and punishment", "published": 1866, "author": "Fyodor Dostoevsky",
     "genres": ["classic", "crime"]},
    {"title": "The Demon", "published": 1872, "author": "Fyodor Dostoevsky",
     "genres": ["classic", "revolution"]},
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_books(repository: CatalogRepository) -> list[Book]:
    """Create sample books, creating authors on first use."""
    print("Creating books...")
    books = []
    for data in BOOKS:
        author = repository.get_or_create_author(data["author"])
        book = repository.save(
            Book(
                title=data["title"],
                published=data["published"],
                author=author,
                genres=data["genres"],
            )
        )
        repository.increment_author_book_count(author.id)
        books.append(book)

    print(f"Created {len(books)} books.")
    return books


def set_birth_years(repository: CatalogRepository) -> None:
    """Set known birth years."""
    for name, born in AUTHORS_BORN.items():
        author = repository.get_author_by_name(name)
        if author is not None:
            author.born = born
            repository.save(author)


def create_user(repository: CatalogRepository) -> User:
    """Create a sample user with the default credential."""
    settings = get_settings()
    return repository.save(
        User(
            username="mluukkai",
            favorite_genre="refactoring",
            hashed_password=hash_password(settings.default_user_password),
        )
    )


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        repository = CatalogRepository(db)
        books = create_books(repository)
        set_birth_years(repository)
        user = create_user(repository)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {repository.count_authors()}")
        print(f"  - Books: {len(books)}")
        print(f"  - User: {user.username}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
