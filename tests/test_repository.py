"""
Catalog Repository Tests

Tests for the persistence adapter: atomic author creation, book
filters, genre aggregation, counters and write rejection.
"""

import logging
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from catalog_api.models import Author, Book, User
from catalog_api.services.repository import (
    CatalogRepository,
    PersistenceError,
    record_book_added,
)


@pytest.fixture
def repository(db_session: Session) -> CatalogRepository:
    return CatalogRepository(db_session)


class TestGetOrCreateAuthor:
    def test_creates_missing_author(self, repository: CatalogRepository):
        author = repository.get_or_create_author("Sandi Metz")

        assert author.id is not None
        assert author.name == "Sandi Metz"
        assert author.book_count == 0
        assert repository.count_authors() == 1

    def test_returns_existing_author(self, repository: CatalogRepository, sample_author: Author):
        author = repository.get_or_create_author("Robert Martin")

        assert author.id == sample_author.id
        assert repository.count_authors() == 1

    def test_repeated_calls_create_one_row(self, repository: CatalogRepository):
        first = repository.get_or_create_author("A")
        second = repository.get_or_create_author("A")

        assert first.id == second.id
        assert repository.count_authors() == 1


class TestBookQueries:
    def test_list_books_in_insertion_order(self, repository, sample_books):
        books = repository.list_books()

        assert [b.id for b in books] == [b.id for b in sample_books]
        assert books[0].author.name == "Robert Martin"

    def test_genre_filter(self, repository, sample_books):
        books = repository.list_books(genre="refactoring")

        assert {b.title for b in books} == {"Clean Code", "Refactoring, edition 2"}

    def test_empty_filters_mean_no_filter(self, repository, sample_books):
        assert len(repository.list_books(author="", genre="")) == 3

    def test_author_filter(self, repository, sample_books):
        books = repository.list_books(author="Martin Fowler")

        assert [b.title for b in books] == ["Refactoring, edition 2"]

    def test_genres_keep_their_order(self, repository, sample_books):
        book = repository.list_books(genre="agile")[0]

        assert list(book.genres) == ["agile", "patterns", "design"]

    def test_list_genres_distinct_in_first_seen_order(self, repository, sample_books):
        assert repository.list_genres() == ["refactoring", "agile", "patterns", "design"]

    def test_counts(self, repository, sample_books):
        assert repository.count_books() == 3
        assert repository.count_authors() == 2


class TestSave:
    def test_save_assigns_id(self, repository: CatalogRepository):
        user = repository.save(
            User(username="bob", favorite_genre="crime", hashed_password="x")
        )

        assert user.id is not None
        assert repository.get_user_by_username("bob").id == user.id

    def test_duplicate_username_is_rejected(self, repository: CatalogRepository):
        repository.save(User(username="bob", favorite_genre="crime", hashed_password="x"))

        with pytest.raises(PersistenceError):
            repository.save(User(username="bob", favorite_genre="drama", hashed_password="y"))

    def test_get_user_by_id_accepts_strings(self, repository, sample_user):
        assert repository.get_user_by_id(str(sample_user.id)).username == "alice"
        assert repository.get_user_by_id("not-a-number") is None


class TestBookCountUpdates:
    def test_increment(self, repository: CatalogRepository, db_session, sample_author):
        repository.increment_author_book_count(sample_author.id)
        repository.increment_author_book_count(sample_author.id)

        db_session.expire_all()
        assert repository.get_author_by_name("Robert Martin").book_count == 2

    def test_record_book_added_uses_own_session(
        self, session_factory: sessionmaker, db_session, sample_author
    ):
        record_book_added(session_factory, sample_author.id)

        db_session.expire_all()
        assert db_session.get(Author, sample_author.id).book_count == 1

    def test_record_book_added_logs_failures(self, caplog):
        db = MagicMock()
        db.execute.side_effect = OperationalError("UPDATE authors", {}, Exception("db down"))
        session_factory = MagicMock()
        session_factory.return_value.__enter__.return_value = db

        with caplog.at_level(logging.ERROR, logger="catalog_api.services.repository"):
            record_book_added(session_factory, 1)

        assert "Failed to update book_count for author 1" in caplog.text
