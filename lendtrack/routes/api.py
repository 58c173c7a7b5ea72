#!/usr/bin/env python

"""
    JSON API routes for lendtrack: books, loans and activity feeds.

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

from contextlib import contextmanager
from typing import Optional, List
from fastapi import APIRouter, Request, HTTPException, status
from lendtrack.core import auth
from lendtrack.core.api import LendTrackAPI
from lendtrack.core.events import events_from_books
from lendtrack.core.exceptions import (
    ValidationError,
    BookNotFoundError,
    StoreError,
)
from lendtrack.schemas.book import Book, BookCreate
from lendtrack.schemas.event import Event

router = APIRouter()


@contextmanager
def store_session(request: Request):
    """Session on the app's Store, with domain errors turned into HTTP errors."""
    try:
        with request.app.state.store.session() as session:
            yield session
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


def require_student(request: Request) -> str:
    if student := auth.get_request_student(request):
        return student
    raise HTTPException(status_code=401, detail="Authentication required")


@router.get("/books", response_model=List[Book])
def get_books(request: Request, title: Optional[str] = None,
              student: Optional[str] = None, author: Optional[str] = None):
    with store_session(request) as session:
        if title is not None:
            books = LendTrackAPI.find_books_by_title(session, title)
        elif student is not None:
            books = LendTrackAPI.find_books_by_student(session, student)
        elif author is not None:
            books = LendTrackAPI.find_books_by_author(session, author)
        else:
            books = LendTrackAPI.get_books(session)
        return [Book.model_validate(book) for book in books]


@router.get("/books/{book_id}", response_model=Book)
def get_book(request: Request, book_id: int):
    with store_session(request) as session:
        return Book.model_validate(LendTrackAPI.get_book(session, book_id))


@router.post("/books", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(request: Request, payload: BookCreate):
    student = require_student(request)
    with store_session(request) as session:
        book = LendTrackAPI.create_book(session, payload.title, payload.author, student)
        return Book.model_validate(book)


@router.post("/books/{book_id}/loan", response_model=Book)
def create_loan(request: Request, book_id: int):
    student = require_student(request)
    with store_session(request) as session:
        return Book.model_validate(LendTrackAPI.create_loan(session, book_id, student))


@router.post("/books/{book_id}/return", response_model=Book)
def return_loan(request: Request, book_id: int):
    """Closes every active loan on the book, whoever opened it."""
    require_student(request)
    with store_session(request) as session:
        return Book.model_validate(LendTrackAPI.return_loan(session, book_id))


@router.get("/events", response_model=List[Event])
def get_events(request: Request):
    with store_session(request) as session:
        events = events_from_books(LendTrackAPI.get_books(session))
    return [Event.model_validate(event) for event in events]


@router.get("/students/{student}/events", response_model=List[Event])
def get_student_events(request: Request, student: str):
    with store_session(request) as session:
        events = LendTrackAPI.student_feed(session, student)
    return [Event.model_validate(event) for event in events]
