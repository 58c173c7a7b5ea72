#!/usr/bin/env python
"""
    Book Schemas for lendtrack

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

from pydantic import BaseModel
from typing import List
from datetime import datetime
from lendtrack.schemas.loan import Loan

class BookCreate(BaseModel):
    title: str = ""
    author: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
            }
        }

class Book(BaseModel):
    id: int
    title: str
    author: str
    student: str
    created: datetime
    is_on_loan: bool
    loans: List[Loan] = []

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "student": "alice",
                "created": "2026-10-01T12:00:00",
                "is_on_loan": True,
                "loans": [{
                    "student": "bob",
                    "created": "2026-10-02T09:30:00",
                    "returned": None,
                    "is_active": True
                }]
            }
        }
