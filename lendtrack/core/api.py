import logging
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from lendtrack.core.models import Book, Loan
from lendtrack.core.events import BookView, Event, events_from_books, events_for_student
from lendtrack.core.exceptions import ValidationError, BookNotFoundError
from lendtrack.core.utils import utcnow

logger = logging.getLogger(__name__)

# Range of the BIGINT id column
MIN_ID = -2 ** 63
MAX_ID = 2 ** 63 - 1


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class LendTrackAPI:

    @classmethod
    def create_book(cls, session: Session, title: str, author: str, student: str) -> Book:
        fields = {"title": _clean(title), "author": _clean(author), "student": _clean(student)}
        if missing := [name for name, value in fields.items() if not value]:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        book = Book(created=utcnow(), **fields)
        session.add(book)
        session.commit()
        logger.info(f"Book {book.id} ({book.title!r}) added by {book.student}")
        return book

    @classmethod
    def get_book(cls, session: Session, book_id: int) -> Book:
        # Ids outside the id column range cannot name a stored book
        if MIN_ID <= book_id <= MAX_ID and (book := session.get(Book, book_id)):
            return book
        raise BookNotFoundError(f"No book with id {book_id}.")

    @classmethod
    def create_loan(cls, session: Session, book_id: int, student: str) -> Book:
        """Start a loan of a book for `student`.

        Books that are already on loan can be lent again; every loan is
        recorded and all of them are closed by `return_loan`.
        """
        book = cls.get_book(session, book_id)
        if not (student := _clean(student)):
            raise ValidationError("Missing required fields: student.")
        book.lend(student)
        session.commit()
        logger.info(f"Book {book.id} lent to {student}")
        return book

    @classmethod
    def return_loan(cls, session: Session, book_id: int) -> Book:
        """Close every active loan of a book. Returning a book that is not
        on loan changes nothing.
        """
        book = cls.get_book(session, book_id)
        active = session.query(Loan).filter(
            Loan.book_id == book.id,
            Loan.is_active
        ).all()
        if not active:
            return book
        now = utcnow()
        for loan in active:
            loan.finalize(now)
        session.commit()
        logger.info(f"Book {book.id} returned ({len(active)} loan(s) closed)")
        return book

    @classmethod
    def _find(cls, session: Session, *criteria) -> List[Book]:
        return session.query(Book).filter(*criteria).order_by(Book.id.desc()).all()

    @classmethod
    def get_books(cls, session: Session) -> List[Book]:
        return cls._find(session)

    @classmethod
    def find_books_by_title(cls, session: Session, title: str) -> List[Book]:
        return cls._find(session, Book.title == title)

    @classmethod
    def find_books_by_student(cls, session: Session, student: str) -> List[Book]:
        return cls._find(session, Book.student == student)

    @classmethod
    def find_books_by_author(cls, session: Session, author: str) -> List[Book]:
        return cls._find(session, Book.author == author)

    @classmethod
    def home_feed(cls, session: Session) -> Tuple[List[BookView], List[Event]]:
        books = cls.get_books(session)
        views = [BookView.from_book(b) for b in books]
        return views, events_from_books(books, views)

    @classmethod
    def student_feed(cls, session: Session, student: str) -> List[Event]:
        return events_for_student(student, lambda: cls.get_books(session))
