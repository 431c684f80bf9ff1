"""
Tests for Books API Endpoints

This module tests all CRUD operations for the /books endpoints.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found
"""

from urllib.parse import parse_qs, urlsplit
from uuid import UUID

import pytest
from fastapi import status

from tests.conftest import DON_QUIXOTE_ID, WAR_AND_PEACE_ID


def query_of(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class TestListBooks:
    """Tests for GET /books endpoint."""

    def test_list_books_empty(self, client):
        """Test listing books when the library is empty."""
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["total_books"] == 0
        assert "next_href" not in data
        assert "prev_href" not in data

    def test_list_books_with_data(self, client, war_and_peace):
        """Test summaries carry the title and a link to the book."""
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_books"] == 1
        assert data["books"][0]["title"] == "War and Peace"
        assert data["books"][0]["href"] == f"http://testserver/books/{WAR_AND_PEACE_ID}"

    def test_list_books_first_page_links(self, client, multiple_books):
        """The first page links forward only."""
        response = client.get("/books?count=2")

        data = response.json()
        assert [b["title"] for b in data["books"]] == ["Test Book 1", "Test Book 2"]
        assert data["total_books"] == 5
        assert query_of(data["next_href"]) == {"count": ["2"], "page": ["1"]}
        assert "prev_href" not in data

    def test_list_books_middle_page_links(self, client, multiple_books):
        """A middle page links both ways."""
        response = client.get("/books?count=2&page=1")

        data = response.json()
        assert [b["title"] for b in data["books"]] == ["Test Book 3", "Test Book 4"]
        assert query_of(data["next_href"]) == {"count": ["2"], "page": ["2"]}
        assert query_of(data["prev_href"]) == {"count": ["2"], "page": ["0"]}
        assert urlsplit(data["next_href"]).path == "/books"

    def test_list_books_last_page_links(self, client, multiple_books):
        """The last page links backward only."""
        response = client.get("/books?count=2&page=2")

        data = response.json()
        assert [b["title"] for b in data["books"]] == ["Test Book 5"]
        assert "next_href" not in data
        assert query_of(data["prev_href"]) == {"count": ["2"], "page": ["1"]}

    def test_list_books_page_past_end(self, client, multiple_books):
        """A page past the end is empty but still reports the total."""
        response = client.get("/books?count=10&page=4")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["total_books"] == 5

    @pytest.mark.parametrize(
        "query",
        ["", "?count=abc&page=xyz", "?count=-3&page=-1", "?count=&page="],
    )
    def test_list_books_bad_paging_uses_defaults(self, client, multiple_books, query):
        """Missing, unparsable or negative paging falls back to 10 and 0."""
        response = client.get(f"/books{query}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data["books"]) == 5
        assert "next_href" not in data
        assert "prev_href" not in data


class TestGetBook:
    """Tests for GET /books/{book_id} endpoint."""

    def test_get_book_success(self, client, war_and_peace):
        """Test getting a book by ID."""
        response = client.get(f"/books/{WAR_AND_PEACE_ID}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == str(WAR_AND_PEACE_ID)
        assert data["title"] == "War and Peace"
        assert data["author"] == "Tolstoy"
        assert data["publisher"] == "The Russian Messenger"
        assert "created_date" in data
        assert "last_modified_date" in data

    def test_get_book_without_publisher_omits_field(self, client, don_quixote):
        """An unset publisher is left out of the JSON."""
        response = client.get(f"/books/{DON_QUIXOTE_ID}")

        assert response.status_code == status.HTTP_200_OK
        assert "publisher" not in response.json()

    def test_get_book_not_found(self, client):
        """Test getting a non-existent book returns 404."""
        response = client.get("/books/00000000-0000-0000-0000-000000000042")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book not found"

    def test_get_book_invalid_id(self, client):
        """Test that a non-UUID id is rejected with 400."""
        response = client.get("/books/not-a-uuid")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid Identifier: input format unparsable"


class TestCreateBook:
    """Tests for PUT /books endpoint."""

    def test_create_book_minimal(self, client, repo):
        """Test creating a book with only required fields."""
        book_data = {
            "id": str(DON_QUIXOTE_ID),
            "title": "Don Quixote",
            "author": "Miguel de Cervantes",
        }

        response = client.put("/books", json=book_data)

        assert response.status_code == status.HTTP_200_OK
        stored = repo.get(DON_QUIXOTE_ID)
        assert stored.title == "Don Quixote"
        assert stored.publisher is None

    def test_create_book_full(self, client, repo):
        """Test creating a book with a publisher, then reading it back."""
        book_data = {
            "id": str(WAR_AND_PEACE_ID),
            "title": "War and Peace",
            "author": "Tolstoy",
            "publisher": "The Russian Messenger",
        }

        response = client.put("/books", json=book_data)
        assert response.status_code == status.HTTP_200_OK

        response = client.get(f"/books/{WAR_AND_PEACE_ID}")
        data = response.json()
        assert data["publisher"] == "The Russian Messenger"
        assert data["created_date"] == data["last_modified_date"]

    def test_create_book_is_idempotent(self, client, repo):
        """Sending the same PUT twice leaves one book."""
        book_data = {
            "id": str(DON_QUIXOTE_ID),
            "title": "Don Quixote",
            "author": "Miguel de Cervantes",
        }

        client.put("/books", json=book_data)
        response = client.put("/books", json=book_data)

        assert response.status_code == status.HTTP_200_OK
        assert client.get("/books").json()["total_books"] == 1

    def test_create_book_invalid_json(self, client, repo):
        """Test that a malformed body is a 400, not a 422."""
        body = (
            '{"id": "b19537af-7997-422b-a3ff-9cac51b4d59e",'
            ' "title": "Don Quixote", "author": "Miguel de Cervantes",}'
        )

        response = client.put(
            "/books",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid Book: input format unparsable"
        assert repo.count() == 0

    def test_create_book_invalid_id(self, client):
        """An id that is not a UUID makes the body unparsable."""
        response = client.put(
            "/books",
            json={"id": "42", "title": "Don Quixote", "author": "Cervantes"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_book_missing_fields(self, client, repo):
        """All missing required fields are listed in order."""
        response = client.put("/books", json={"publisher": "Nobody"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            "Invalid Book, the following fields are required: id, title, author"
        )
        assert repo.count() == 0

    def test_create_book_nil_id_and_blank_title(self, client):
        """A nil UUID and a whitespace title count as missing."""
        response = client.put(
            "/books",
            json={
                "id": str(UUID(int=0)),
                "title": "   ",
                "author": "Cervantes",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].endswith(": id, title")

    def test_create_book_null_title(self, client, repo):
        """A JSON null title is a missing field, not an unparsable body."""
        response = client.put(
            "/books",
            json={"id": str(DON_QUIXOTE_ID), "title": None, "author": "Cervantes"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            "Invalid Book, the following fields are required: title"
        )
        assert repo.count() == 0

    def test_create_book_null_author(self, client, repo):
        """A JSON null author is reported the same way."""
        response = client.put(
            "/books",
            json={"id": str(DON_QUIXOTE_ID), "title": "Don Quixote", "author": None},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            "Invalid Book, the following fields are required: author"
        )
        assert repo.count() == 0


class TestUpdateBook:
    """Tests for PATCH /books endpoint."""

    def test_update_book_success(self, client, repo, war_and_peace):
        """Test updating an existing book."""
        response = client.patch(
            "/books",
            json={
                "id": str(WAR_AND_PEACE_ID),
                "title": "Voyna i mir",
                "author": "Leo Tolstoy",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        stored = repo.get(WAR_AND_PEACE_ID)
        assert stored.title == "Voyna i mir"
        assert stored.author == "Leo Tolstoy"
        assert stored.publisher is None
        assert stored.created_date == war_and_peace.created_date
        assert stored.last_modified_date >= war_and_peace.last_modified_date

    def test_update_book_not_found(self, client, repo, war_and_peace):
        """Test updating a non-existent book returns 404."""
        response = client.patch(
            "/books",
            json={"id": str(DON_QUIXOTE_ID), "title": "Ghost", "author": "Nobody"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert repo.get(WAR_AND_PEACE_ID) == war_and_peace

    def test_update_book_missing_id(self, client):
        """An update must name the book it changes."""
        response = client.patch("/books", json={"title": "Ghost", "author": "Nobody"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].endswith(": id")

    def test_update_book_invalid_json(self, client):
        """Test that a malformed body is a 400."""
        response = client.patch(
            "/books",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteBook:
    """Tests for DELETE /books/{book_id} endpoint."""

    def test_delete_book_success(self, client, don_quixote, war_and_peace):
        """Deleting one book leaves the other reachable."""
        response = client.delete(f"/books/{DON_QUIXOTE_ID}")
        assert response.status_code == status.HTTP_200_OK

        response = client.get(f"/books/{DON_QUIXOTE_ID}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

        response = client.get(f"/books/{WAR_AND_PEACE_ID}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "War and Peace"

        data = client.get("/books?count=10&page=0").json()
        assert data["total_books"] == 1
        assert [b["title"] for b in data["books"]] == ["War and Peace"]

    def test_delete_book_not_found(self, client, war_and_peace):
        """Test deleting a non-existent book returns 404."""
        response = client.delete(f"/books/{DON_QUIXOTE_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/books").json()["total_books"] == 1

    def test_delete_book_invalid_id(self, client):
        """Test that a non-UUID id is rejected with 400."""
        response = client.delete("/books/12345")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
