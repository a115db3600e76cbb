from pydantic import BaseModel


class AdminUser(BaseModel):
    username: str
    is_admin: bool = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
