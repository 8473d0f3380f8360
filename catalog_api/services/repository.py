"""
Catalog Repository

Persistence adapter for users, authors and books. Resolvers go through
this class instead of issuing queries themselves, so every database
rule (unique names, atomic author creation, counter updates) lives here.

Usage:
    repository = CatalogRepository(db)
    author = repository.get_or_create_author("Robert Martin")
    books = repository.list_books(genre="refactoring")
"""

import logging
from typing import Callable

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from catalog_api.models import Author, Book, BookGenre, User

logger = logging.getLogger(__name__)

# Dialects that support INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PersistenceError(Exception):
    """Raised when the database rejects a write (constraint or data error)."""

    pass


class CatalogRepository:
    """Repository over a SQLAlchemy session for the catalog's records."""

    def __init__(self, db: Session):
        self.db = db

    # =========================================================================
    # Writes
    # =========================================================================

    def save(self, instance):
        """
        Persist a new or modified record and reload it.

        Raises:
            PersistenceError: If the database rejects the write. The session
                is rolled back before raising.
        """
        self.db.add(instance)
        try:
            self.db.commit()
        except (IntegrityError, DataError) as e:
            self.db.rollback()
            logger.warning(f"Rejected write for {type(instance).__name__}: {e.orig}")
            raise PersistenceError(str(e.orig)) from e
        self.db.refresh(instance)
        return instance

    def get_or_create_author(self, name: str) -> Author:
        """
        Return the author with this name, creating it with book_count=0
        if it does not exist yet.

        The insert is a single INSERT ... ON CONFLICT DO NOTHING against the
        unique name constraint, so concurrent callers end up with one row.
        """
        insert = _CONFLICT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            author = self.get_author_by_name(name)
            if author is None:
                author = self.save(Author(name=name, book_count=0))
                logger.info(f"Created author '{name}' (id={author.id})")
            return author

        stmt = (
            insert(Author)
            .values(name=name, book_count=0)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except (IntegrityError, DataError) as e:
            self.db.rollback()
            raise PersistenceError(str(e.orig)) from e

        if result.rowcount:
            logger.info(f"Created author '{name}'")
        return self.db.execute(
            select(Author).where(Author.name == name)
        ).scalar_one()

    def increment_author_book_count(self, author_id: int) -> None:
        """Atomically add one to an author's book_count."""
        self.db.execute(
            update(Author)
            .where(Author.id == author_id)
            .values(book_count=Author.book_count + 1)
        )
        self.db.commit()

    # =========================================================================
    # Users
    # =========================================================================

    def get_user_by_id(self, user_id: int | str) -> User | None:
        """Look up a user by primary key; non-numeric ids match nothing."""
        try:
            pk = int(user_id)
        except (TypeError, ValueError):
            return None
        return self.db.get(User, pk)

    def get_user_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return self.db.execute(stmt).scalar_one_or_none()

    # =========================================================================
    # Authors
    # =========================================================================

    def get_author_by_name(self, name: str) -> Author | None:
        stmt = select(Author).where(Author.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_authors(self) -> list[Author]:
        stmt = select(Author).order_by(Author.id)
        return list(self.db.execute(stmt).scalars().all())

    def count_authors(self) -> int:
        return self.db.execute(select(func.count()).select_from(Author)).scalar_one()

    # =========================================================================
    # Books
    # =========================================================================

    def list_books(
        self,
        author: str | None = None,
        genre: str | None = None,
    ) -> list[Book]:
        """
        Get books with their author populated.

        Args:
            author: Only books by the author with exactly this name
            genre: Only books whose genre list contains this genre

        Empty strings are treated the same as None (no filter).
        """
        stmt = (
            select(Book)
            .options(selectinload(Book.author), selectinload(Book.genre_entries))
            .order_by(Book.id)
        )

        if author:
            stmt = stmt.join(Book.author).where(Author.name == author)

        if genre:
            stmt = stmt.where(Book.genre_entries.any(BookGenre.name == genre))

        return list(self.db.execute(stmt).scalars().all())

    def list_genres(self) -> list[str]:
        """Distinct genre names, in order of first appearance."""
        stmt = (
            select(BookGenre.name)
            .group_by(BookGenre.name)
            .order_by(func.min(BookGenre.id))
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_books(self) -> int:
        return self.db.execute(select(func.count()).select_from(Book)).scalar_one()


# =============================================================================
# Background Tasks
# =============================================================================


def record_book_added(session_factory: Callable[[], Session], author_id: int) -> None:
    """
    Increment an author's book_count after a book was added.

    Runs as a fire-and-forget background task with its own session.
    Failures are logged and not reported to the client.
    """
    try:
        with session_factory() as db:
            CatalogRepository(db).increment_author_book_count(author_id)
    except SQLAlchemyError:
        logger.exception(f"Failed to update book_count for author {author_id}")
        return
    logger.debug(f"Incremented book_count for author {author_id}")
