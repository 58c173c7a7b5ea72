#!/usr/bin/env python

"""
    Activity feed for lendtrack.

    Books and their loans are flattened into a single list of events
    (book added, loan started, loan returned), most recent first. Events
    are derived on every request and never stored.

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Union

LOAN_STATUS_ON_LOAN = "on-loan"
LOAN_STATUS_AVAILABLE = "available"


@dataclass(frozen=True)
class BookView:
    """Read-only snapshot of a Book for display, carrying its loan status."""

    id: int
    title: str
    author: str
    student: str
    created: datetime.datetime
    on_loan: bool

    @property
    def is_available(self) -> bool:
        return not self.on_loan

    @property
    def loan_status(self) -> str:
        """CSS class used by the templates."""
        return LOAN_STATUS_ON_LOAN if self.on_loan else LOAN_STATUS_AVAILABLE

    @classmethod
    def from_book(cls, book) -> "BookView":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            student=book.student,
            created=book.created,
            on_loan=book.is_on_loan,
        )


@dataclass(frozen=True)
class BookAdded:
    timestamp: datetime.datetime
    book: BookView
    kind = "book"


@dataclass(frozen=True)
class LoanStarted:
    timestamp: datetime.datetime
    student: str
    book: BookView
    kind = "loan"


@dataclass(frozen=True)
class LoanReturned:
    timestamp: datetime.datetime
    student: str
    book: BookView
    kind = "return"


Event = Union[BookAdded, LoanStarted, LoanReturned]


def _newest_first(events: List[Event]) -> List[Event]:
    # sorted() is stable with reverse=True too: ties keep insertion order
    return sorted(events, key=lambda event: event.timestamp, reverse=True)


def _loan_events(loan, view: BookView) -> List[Event]:
    events = [LoanStarted(timestamp=loan.created, student=loan.student, book=view)]
    if loan.returned is not None:
        events.append(LoanReturned(timestamp=loan.returned, student=loan.student, book=view))
    return events


def events_from_books(books: Iterable, views: Optional[Sequence[BookView]] = None) -> List[Event]:
    """Every book addition and loan transition in `books`, newest first.

    `views`, when given, are the already built views of `books` in the
    same order and are attached to the events instead of new ones.
    """
    books = list(books)
    if views is None:
        views = [BookView.from_book(book) for book in books]
    events: List[Event] = []
    for book, view in zip(books, views):
        events.append(BookAdded(timestamp=book.created, book=view))
        for loan in book.loans:
            events.extend(_loan_events(loan, view))
    return _newest_first(events)


def events_for_student(student: str, fetch_books: Callable[[], Iterable]) -> List[Event]:
    """Loan events of a single student across all books, newest first.

    `fetch_books` returns the whole collection; any failure it raises
    propagates to the caller. Book additions are not part of this feed.
    """
    events: List[Event] = []
    for book in fetch_books():
        view = None
        for loan in book.loans:
            if loan.student != student:
                continue
            if view is None:
                view = BookView.from_book(book)
            events.extend(_loan_events(loan, view))
    return _newest_first(events)
