#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_events
    ~~~~~~~~~~~~~~~~~

    Activity feed derived from books and their loans.

    :copyright: (c) 2026 by Authors.
    :license: see LICENSE for more details.
"""

import dataclasses
import datetime
import pytest

from lendtrack.core.models import Book
from lendtrack.core.events import (
    BookView,
    BookAdded,
    LoanStarted,
    LoanReturned,
    events_from_books,
    events_for_student,
)
from lendtrack.core.exceptions import StoreError

T0 = datetime.datetime(2026, 10, 1, 9, 0)


def hours(n):
    return T0 + datetime.timedelta(hours=n)


def make_book(title="Dune", author="Herbert", student="alice", created=T0, loans=()):
    """`loans` is a sequence of (student, started, returned or None)."""
    book = Book(title=title, author=author, student=student, created=created)
    for borrower, started, returned in loans:
        loan = book.lend(borrower, when=started)
        if returned is not None:
            loan.finalize(returned)
    return book


@pytest.fixture
def library():
    return [
        make_book("Dune", "Herbert", "alice", T0, [
            ("bob", hours(1), hours(5)),
            ("carol", hours(6), None),
        ]),
        make_book("Emma", "Austen", "dave", hours(2), [
            ("bob", hours(3), None),
        ]),
        make_book("Ulysses", "Joyce", "carol", hours(4)),
    ]


def test_book_without_loans_yields_only_book_added():
    book = make_book()
    events = events_from_books([book])
    assert len(events) == 1
    assert isinstance(events[0], BookAdded)
    assert events[0].timestamp == T0
    assert events[0].book.title == "Dune"
    assert not book.is_on_loan

def test_active_loan_is_listed_before_the_book_was_added():
    book = make_book(loans=[("bob", hours(1), None)])
    events = events_from_books([book])
    assert [type(e) for e in events] == [LoanStarted, BookAdded]
    assert events[0].student == "bob"
    assert book.is_on_loan
    assert events[0].book.loan_status == "on-loan"
    assert not events[0].book.is_available

def test_returned_loan_adds_a_return_event_first():
    book = make_book(loans=[("bob", hours(1), hours(2))])
    events = events_from_books([book])
    assert [type(e) for e in events] == [LoanReturned, LoanStarted, BookAdded]
    assert events[0].student == "bob"
    assert events[0].timestamp == hours(2)
    assert not book.is_on_loan
    assert events[0].book.loan_status == "available"

def test_one_event_per_book_loan_and_return(library):
    for book in library:
        returned = sum(1 for loan in book.loans if loan.returned is not None)
        assert len(events_from_books([book])) == 1 + len(book.loans) + returned
    assert len(events_from_books(library)) == 3 + 3 + 1

def test_events_are_newest_first(library):
    events = events_from_books(library)
    for newer, older in zip(events, events[1:]):
        assert newer.timestamp >= older.timestamp
    assert [e.kind for e in events] == ["loan", "return", "book", "loan", "book", "loan", "book"]

def test_ties_keep_insertion_order():
    book = make_book(created=T0, loans=[("bob", T0, None), ("carol", T0, None)])
    events = events_from_books([book])
    assert [type(e) for e in events] == [BookAdded, LoanStarted, LoanStarted]
    assert [e.student for e in events[1:]] == ["bob", "carol"]

def test_on_loan_matches_unreturned_loan_events(library):
    events = events_from_books(library)
    for book in library:
        started = sum(1 for e in events if isinstance(e, LoanStarted) and e.book.title == book.title)
        returned = sum(1 for e in events if isinstance(e, LoanReturned) and e.book.title == book.title)
        assert book.is_on_loan == (started > returned)

def test_book_view_is_a_read_only_snapshot():
    book = make_book(loans=[("bob", hours(1), None)])
    view = BookView.from_book(book)
    assert view.on_loan
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.on_loan = False
    assert not hasattr(book, "on_loan")

def test_student_events_only_cover_that_student(library):
    events = events_for_student("bob", lambda: library)
    assert [type(e) for e in events] == [LoanReturned, LoanStarted, LoanStarted]
    assert {e.student for e in events} == {"bob"}
    assert [e.book.title for e in events] == ["Dune", "Emma", "Dune"]

def test_student_events_skip_book_additions(library):
    # carol registered Ulysses but never borrowed it
    events = events_for_student("carol", lambda: library)
    assert all(not isinstance(e, BookAdded) for e in events)
    assert [e.book.title for e in events] == ["Dune"]

def test_student_events_ignore_other_students_loans(library):
    before = events_for_student("bob", lambda: library)
    library[0].loans[1].student = "erin"
    assert events_for_student("bob", lambda: library) == before

def test_student_match_is_exact(library):
    assert events_for_student("Bob", lambda: library) == []
    assert events_for_student("bo", lambda: library) == []

def test_student_events_scenario():
    dune = make_book(loans=[("bob", hours(1), hours(2))])
    other = make_book("Emma", "Austen", "carol", hours(3), [("carol", hours(4), None)])
    events = events_for_student("bob", lambda: [dune, other])
    assert len(events) == 2
    assert all(e.student == "bob" for e in events)

def test_student_events_propagate_fetch_failures():
    def fetch():
        raise StoreError("connection refused")
    with pytest.raises(StoreError):
        events_for_student("bob", fetch)

def test_prebuilt_views_are_attached_to_events(library):
    views = [BookView.from_book(book) for book in library]
    events = events_from_books(library, views)
    assert events == events_from_books(library)
    assert {id(event.book) for event in events} <= {id(view) for view in views}
