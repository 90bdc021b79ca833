from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    usuario_id: int
    username: str
    nombre: str
    email: str
    status: str
    last_login_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
