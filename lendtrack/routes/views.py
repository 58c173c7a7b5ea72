#!/usr/bin/env python

"""
    Server rendered pages for lendtrack: the activity feed, book, student
    and author pages, and the forms to add, lend and return books.

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

from urllib.parse import urlencode
from fastapi import APIRouter, Request, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from lendtrack import configs
from lendtrack.core import auth
from lendtrack.core.api import LendTrackAPI
from lendtrack.core.events import BookView
from lendtrack.core.exceptions import ValidationError, StoreError
from lendtrack.routes.api import store_session

router = APIRouter()


def render(request: Request, name: str, status_code: int = 200, **context):
    context.setdefault("current_student", auth.get_request_student(request))
    return request.app.templates.TemplateResponse(
        request, name, context, status_code=status_code)


def login_redirect(request: Request):
    query = urlencode({"redir": request.url.path})
    return RedirectResponse(url=f"{configs.LOGIN_URL}?{query}", status_code=status.HTTP_303_SEE_OTHER)


def views(books):
    return [BookView.from_book(book) for book in books]


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    with store_session(request) as session:
        books, events = LendTrackAPI.home_feed(session)
    return render(request, "home.html", books=books, events=events)


@router.get("/book", response_class=HTMLResponse)
def books_by_title(request: Request, name: str = ""):
    with store_session(request) as session:
        books = views(LendTrackAPI.find_books_by_title(session, name))
    return render(request, "book.html", books=books, title=name)


@router.get("/book/new", response_class=HTMLResponse)
def new_book(request: Request):
    if not auth.get_request_student(request):
        return login_redirect(request)
    return render(request, "book_new.html")


@router.post("/book/create", response_class=HTMLResponse)
def create_book(request: Request, title: str = Form(""), author: str = Form("")):
    if not (student := auth.get_request_student(request)):
        return login_redirect(request)
    try:
        with request.app.state.store.session() as session:
            book = BookView.from_book(
                LendTrackAPI.create_book(session, title, author, student))
    except ValidationError as e:
        return render(request, "book_new.html", status_code=400,
                      error=str(e), title=title, author=author)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return render(request, "book_create.html", book=book)


@router.post("/book/{book_id}/loan")
def lend_book(request: Request, book_id: int):
    if not (student := auth.get_request_student(request)):
        return login_redirect(request)
    with store_session(request) as session:
        book = LendTrackAPI.create_loan(session, book_id, student)
        title = book.title
    return RedirectResponse(url=f"/book?{urlencode({'name': title})}", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/book/{book_id}/return")
def return_book(request: Request, book_id: int):
    if not auth.get_request_student(request):
        return login_redirect(request)
    with store_session(request) as session:
        book = LendTrackAPI.return_loan(session, book_id)
        title = book.title
    return RedirectResponse(url=f"/book?{urlencode({'name': title})}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/student", response_class=HTMLResponse)
def student_page(request: Request, name: str = ""):
    with store_session(request) as session:
        books = views(LendTrackAPI.find_books_by_student(session, name))
        events = LendTrackAPI.student_feed(session, name)
    return render(request, "student.html", books=books, events=events, student=name)


@router.get("/author", response_class=HTMLResponse)
def author_page(request: Request, name: str = ""):
    with store_session(request) as session:
        books = views(LendTrackAPI.find_books_by_author(session, name))
    return render(request, "author.html", books=books, author=name)


@router.get("/about", response_class=HTMLResponse)
def about(request: Request):
    return render(request, "about.html")


# Development stand-in for the single sign-on provider
@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, redir: str = "/"):
    return render(request, "login.html", redir=redir)


@router.post("/login")
def login(request: Request, student: str = Form(""), redir: str = Form("/")):
    if not (student := student.strip()):
        return render(request, "login.html", status_code=400,
                      redir=redir, error="Please enter your name.")
    # Only redirect within this site
    if not redir.startswith("/") or redir.startswith("//"):
        redir = "/"
    response = RedirectResponse(url=redir, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=auth.COOKIE_NAME,
        value=auth.create_session_cookie(student),
        max_age=auth.COOKIE_TTL,
        httponly=True,
        samesite="Lax",
        path="/"
    )
    return response


@router.get("/logout")
def logout():
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(key=auth.COOKIE_NAME, path="/")
    return response
