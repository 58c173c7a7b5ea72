from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

class BookView(BaseModel):
    id: int
    title: str
    author: str
    student: str
    created: datetime
    on_loan: bool
    is_available: bool
    loan_status: str

    class Config:
        from_attributes = True

class Event(BaseModel):
    kind: Literal["book", "loan", "return"]
    timestamp: datetime
    student: Optional[str] = None
    book: BookView

    class Config:
        from_attributes = True
