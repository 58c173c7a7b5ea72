#!/usr/bin/env python

"""
    Book and Loan models for lendtrack.

    A Book owns its Loans; loans are only ever appended and a loan's
    `returned` timestamp is set once.

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

from sqlalchemy import Column, String, Integer, BigInteger, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from sqlalchemy.ext.hybrid import hybrid_property
from lendtrack.core.db import Base
from lendtrack.core.exceptions import ValidationError
from lendtrack.core.utils import utcnow

# SQLite only autoincrements INTEGER primary keys
Identifier = BigInteger().with_variant(Integer, "sqlite")


class Book(Base):
    __tablename__ = 'books'

    id = Column(Identifier, primary_key=True)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    student = Column(String, nullable=False, index=True)
    created = Column(DateTime, default=utcnow, nullable=False)

    loans = relationship(
        'Loan', back_populates='book', order_by='Loan.id',
        cascade='all, delete-orphan')

    @property
    def is_on_loan(self):
        """True while any loan on this book is still open.

        Nothing stops a book from having several open loans at once.
        """
        return any(loan.is_active for loan in self.loans)

    def lend(self, student: str, when=None):
        loan = Loan(student=student, created=when or utcnow())
        self.loans.append(loan)
        return loan

    def __repr__(self):
        return f"<Book {self.id} {self.title!r} by {self.author!r}>"


class Loan(Base):
    __tablename__ = 'loans'

    id = Column(Identifier, primary_key=True)
    book_id = Column(Identifier, ForeignKey('books.id', ondelete='CASCADE'), nullable=False)
    student = Column(String, nullable=False, index=True)
    created = Column(DateTime, default=utcnow, nullable=False)
    returned = Column(DateTime, nullable=True)

    book = relationship('Book', back_populates='loans')

    @hybrid_property
    def is_active(self):
        """A loan stays active until it has a `returned` timestamp."""
        return self.returned is None

    @is_active.expression
    def is_active(cls):
        return cls.returned.is_(None)

    @validates('returned')
    def validate_returned(self, key, value):
        if value is None:
            if self.returned is not None:
                raise ValidationError("A returned loan cannot be reopened.")
            return value
        if self.created is not None and value < self.created:
            raise ValidationError("A loan cannot be returned before it started.")
        return value

    @validates('created')
    def validate_created(self, key, value):
        if value is not None and self.returned is not None and self.returned < value:
            raise ValidationError("A loan cannot be returned before it started.")
        return value

    def finalize(self, when=None):
        when = when or utcnow()
        if self.created is not None:
            when = max(when, self.created)
        self.returned = when
        return self

    def __repr__(self):
        return f"<Loan {self.id} {self.student!r} returned={self.returned}>"
