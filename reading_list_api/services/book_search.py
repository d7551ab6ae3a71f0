"""
Book Search Service

Builds the filtered book query shared by the catalog listing (GET /book)
and the reading list listing (GET /readingList/{id}/books).

A predicate is only added for a filter that was supplied, so an empty
filter set returns every book, including books whose optional columns
are NULL.
"""

from sqlalchemy import Select

from reading_list_api.dependencies import BookSearchParams
from reading_list_api.models import Book
from reading_list_api.utils.isbn import normalize_isbn

# Filter attribute -> column for case-insensitive substring filters
TEXT_FILTERS = {
    "isbn13": Book.isbn13,
    "isbn10": Book.isbn10,
    "title": Book.title,
    "author": Book.author,
    "publisher": Book.publisher,
    "edition": Book.edition,
    "genre": Book.genre,
    "language": Book.language,
    "summary_contains": Book.summary,
}


def contains_ignore_case(column, term: str):
    """
    Case-insensitive literal substring predicate.

    autoescape makes % and _ in the term match themselves instead of acting
    as LIKE wildcards. icontains lowercases both sides, so PostgreSQL and
    SQLite behave the same.
    """
    return column.icontains(term, autoescape=True)


def apply_book_filters(stmt: Select, filters: BookSearchParams) -> Select:
    """
    Apply search and filter parameters to a book query.

    - Text filters: partial match, case-insensitive
    - publication_date_start/end: inclusive date range
    - page_count_min/max: inclusive page count range

    Args:
        stmt: SQLAlchemy select statement that includes the book table
        filters: BookSearchParams instance with filter values

    Returns:
        Modified SQLAlchemy select statement with filters applied
    """
    for attribute, column in TEXT_FILTERS.items():
        term = getattr(filters, attribute)
        if not term:
            continue
        # ISBNs are stored without separators
        if attribute in ("isbn13", "isbn10"):
            term = normalize_isbn(term)
        stmt = stmt.where(contains_ignore_case(column, term))

    # Filter by publication date range
    if filters.publication_date_start is not None:
        stmt = stmt.where(Book.publication_date >= filters.publication_date_start)
    if filters.publication_date_end is not None:
        stmt = stmt.where(Book.publication_date <= filters.publication_date_end)

    # Filter by page count range
    if filters.page_count_min is not None:
        stmt = stmt.where(Book.page_count >= filters.page_count_min)
    if filters.page_count_max is not None:
        stmt = stmt.where(Book.page_count <= filters.page_count_max)

    return stmt
