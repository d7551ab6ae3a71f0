"""
Tests for Reading List Endpoints

Tests cover:
- Reading list CRUD
- The optional per-user title uniqueness policy
- Placing books on lists, changing their status and removing them
- Listing the books of a list with filters
"""

from fastapi import status

from reading_list_api.config import get_settings
from reading_list_api.models import Book, ReadingList, ReadingListEntry, User


class TestReadingListCrud:
    """Tests for /readingList and /readingList/{id}."""

    def test_create_reading_list(self, client, sample_user):
        response = client.post(
            "/readingList",
            json={"userId": sample_user.id, "title": "Summer 2024"},
        )

        assert response.status_code == status.HTTP_200_OK
        list_id = response.json()["id"]

        data = client.get(f"/readingList/{list_id}").json()
        assert data["userId"] == sample_user.id
        assert data["title"] == "Summer 2024"
        assert "createdAt" in data

    def test_create_reading_list_unknown_user(self, client):
        response = client.post("/readingList", json={"userId": 99999, "title": "Orphan"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"

    def test_create_reading_list_blank_title(self, client, sample_user):
        response = client.post(
            "/readingList",
            json={"userId": sample_user.id, "title": "  "},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate_titles_allowed_by_default(self, client, sample_reading_list):
        response = client.post(
            "/readingList",
            json={"userId": sample_reading_list.user_id, "title": sample_reading_list.title},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_duplicate_titles_rejected_when_unique(
        self, client, sample_reading_list, monkeypatch
    ):
        monkeypatch.setattr(get_settings(), "unique_reading_list_titles", True)

        response = client.post(
            "/readingList",
            json={"userId": sample_reading_list.user_id, "title": sample_reading_list.title},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Reading list with this title already exists"

    def test_rename_to_own_title_when_unique(
        self, client, sample_reading_list, monkeypatch
    ):
        monkeypatch.setattr(get_settings(), "unique_reading_list_titles", True)

        response = client.put(
            f"/readingList/{sample_reading_list.id}",
            json={"title": sample_reading_list.title},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_get_reading_list_not_found(self, client):
        response = client.get("/readingList/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Reading List not found"

    def test_rename_reading_list(self, client, sample_reading_list):
        response = client.put(
            f"/readingList/{sample_reading_list.id}",
            json={"title": "Autumn 2024"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": sample_reading_list.id}

        data = client.get(f"/readingList/{sample_reading_list.id}").json()
        assert data["title"] == "Autumn 2024"

    def test_rename_reading_list_not_found(self, client):
        response = client.put("/readingList/99999", json={"title": "Nowhere"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_reading_list_keeps_books(
        self, client, db_session, populated_reading_list, multiple_books
    ):
        list_id = populated_reading_list.id

        response = client.delete(f"/readingList/{list_id}")

        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"/readingList/{list_id}").status_code == status.HTTP_404_NOT_FOUND

        assert db_session.query(ReadingListEntry).filter_by(reading_list_id=list_id).count() == 0
        assert db_session.query(Book).count() == len(multiple_books)

    def test_delete_reading_list_not_found(self, client):
        response = client.delete("/readingList/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestStatuses:
    """Tests for GET /readingList/statuses."""

    def test_list_statuses(self, client):
        response = client.get("/readingList/statuses")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {"id": 1, "name": "to-read"},
            {"id": 2, "name": "reading"},
            {"id": 3, "name": "finished"},
        ]


class TestReadingListEntries:
    """Tests for /readingList/{id}/book."""

    def test_add_book(self, client, db_session, sample_reading_list, sample_book):
        response = client.post(
            f"/readingList/{sample_reading_list.id}/book",
            json={"bookId": sample_book.id, "statusId": 1},
        )

        assert response.status_code == status.HTTP_200_OK
        entry = db_session.get(ReadingListEntry, response.json()["id"])
        assert entry.reading_list_id == sample_reading_list.id
        assert entry.book_id == sample_book.id
        assert entry.status_id == 1

    def test_add_book_twice(self, client, sample_reading_list, sample_book):
        url = f"/readingList/{sample_reading_list.id}/book"
        client.post(url, json={"bookId": sample_book.id, "statusId": 1})

        response = client.post(url, json={"bookId": sample_book.id, "statusId": 2})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Book already in reading list"

    def test_add_book_unknown_list(self, client, sample_book):
        response = client.post(
            "/readingList/99999/book",
            json={"bookId": sample_book.id, "statusId": 1},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Reading List not found"

    def test_add_unknown_book(self, client, sample_reading_list):
        response = client.post(
            f"/readingList/{sample_reading_list.id}/book",
            json={"bookId": 99999, "statusId": 1},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book not found"

    def test_add_book_invalid_status(self, client, sample_reading_list, sample_book):
        response = client.post(
            f"/readingList/{sample_reading_list.id}/book",
            json={"bookId": sample_book.id, "statusId": 99},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid book status"

    def test_add_duplicate_is_reported_before_invalid_status(
        self, client, populated_reading_list, multiple_books
    ):
        response = client.post(
            f"/readingList/{populated_reading_list.id}/book",
            json={"bookId": multiple_books[0].id, "statusId": 99},
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_status(self, client, db_session, populated_reading_list, multiple_books):
        moby_dick = multiple_books[0]

        response = client.put(
            f"/readingList/{populated_reading_list.id}/book/{moby_dick.id}",
            json={"statusId": 3},
        )

        assert response.status_code == status.HTTP_200_OK
        entry = db_session.get(ReadingListEntry, response.json()["id"])
        db_session.refresh(entry)
        assert entry.book_id == moby_dick.id
        assert entry.status_id == 3

    def test_update_status_book_not_on_list(self, client, sample_reading_list, sample_book):
        response = client.put(
            f"/readingList/{sample_reading_list.id}/book/{sample_book.id}",
            json={"statusId": 2},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book not found in reading list"

    def test_update_status_invalid_status_is_reported_before_missing_entry(
        self, client, sample_reading_list, sample_book
    ):
        response = client.put(
            f"/readingList/{sample_reading_list.id}/book/{sample_book.id}",
            json={"statusId": 99},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid book status"

    def test_update_status_unknown_book(self, client, sample_reading_list):
        response = client.put(
            f"/readingList/{sample_reading_list.id}/book/99999",
            json={"statusId": 2},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book not found"

    def test_remove_book_and_add_it_again(self, client, populated_reading_list, multiple_books):
        moby_dick = multiple_books[0]
        list_url = f"/readingList/{populated_reading_list.id}"

        response = client.delete(f"{list_url}/book/{moby_dick.id}")
        assert response.status_code == status.HTTP_200_OK

        titles = [book["title"] for book in client.get(f"{list_url}/books").json()]
        assert "Moby-Dick" not in titles

        response = client.post(
            f"{list_url}/book",
            json={"bookId": moby_dick.id, "statusId": 2},
        )
        assert response.status_code == status.HTTP_200_OK

    def test_remove_book_keeps_it_in_catalog(self, client, populated_reading_list, multiple_books):
        moby_dick = multiple_books[0]

        client.delete(f"/readingList/{populated_reading_list.id}/book/{moby_dick.id}")

        assert client.get(f"/book/{moby_dick.id}").status_code == status.HTTP_200_OK

    def test_remove_book_not_on_list(self, client, sample_reading_list, sample_book):
        response = client.delete(f"/readingList/{sample_reading_list.id}/book/{sample_book.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book not found in reading list"


class TestReadingListBooks:
    """Tests for GET /readingList/{id}/books."""

    def test_list_books_with_status(self, client, populated_reading_list):
        response = client.get(f"/readingList/{populated_reading_list.id}/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [(book["title"], book["statusId"]) for book in data] == [
            ("Moby-Dick", 1),
            ("War and Peace", 2),
            ("1984", 3),
        ]
        assert all("entryId" in book for book in data)
        assert data[0]["author"] == "Herman Melville"

    def test_list_books_empty_list(self, client, sample_reading_list):
        response = client.get(f"/readingList/{sample_reading_list.id}/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_books_unknown_list(self, client):
        response = client.get("/readingList/99999/books")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_filter_by_status(self, client, populated_reading_list):
        response = client.get(
            f"/readingList/{populated_reading_list.id}/books",
            params={"statusId": 2},
        )

        assert [book["title"] for book in response.json()] == ["War and Peace"]

    def test_filter_by_book_fields(self, client, populated_reading_list):
        response = client.get(
            f"/readingList/{populated_reading_list.id}/books",
            params={"author": "ORWELL"},
        )

        assert [book["title"] for book in response.json()] == ["1984"]

    def test_only_books_of_this_list(
        self, client, db_session, populated_reading_list, sample_user, multiple_books
    ):
        response = client.post(
            "/readingList",
            json={"userId": sample_user.id, "title": "Other"},
        )
        other_id = response.json()["id"]
        client.post(
            f"/readingList/{other_id}/book",
            json={"bookId": multiple_books[0].id, "statusId": 1},
        )

        response = client.get(f"/readingList/{other_id}/books")

        assert [book["title"] for book in response.json()] == ["Moby-Dick"]


class TestReadingListConstraints:
    """The unique (list, book) pair rejects duplicates the look-up did not see."""

    def test_duplicate_pair_rejected_by_constraint(
        self, committing_client, committing_session, monkeypatch
    ):
        user = User(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            password_hash="not-used",
        )
        book = Book(isbn13="9780142437247", title="Moby-Dick", author="Herman Melville")
        reading_list = ReadingList(user=user, title="Summer 2024")
        reading_list.entries = [ReadingListEntry(book=book, status_id=1)]
        committing_session.add(reading_list)
        committing_session.commit()

        # A concurrent request placed the book after the look-up ran
        monkeypatch.setattr(
            "reading_list_api.routers.reading_lists.get_entry",
            lambda db, reading_list_id, book_id: None,
        )

        response = committing_client.post(
            f"/readingList/{reading_list.id}/book",
            json={"bookId": book.id, "statusId": 2},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Book already in reading list"

        entries = committing_session.query(ReadingListEntry).all()
        assert [(entry.book_id, entry.status_id) for entry in entries] == [(book.id, 1)]
