from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class Loan(BaseModel):
    student: str
    created: datetime
    returned: Optional[datetime] = None
    is_active: bool

    class Config:
        from_attributes = True
