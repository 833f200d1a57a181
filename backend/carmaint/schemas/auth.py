from pydantic import BaseModel, Field


class LoginResponse(BaseModel):
    """
    Returned by form login after the session cookie has been set.

    Attributes:
        username: The authenticated user
        authenticated: Always true on success
    """
    username: str = Field(..., description="Authenticated username")
    authenticated: bool = Field(default=True)


class LogoutResponse(BaseModel):
    detail: str = Field(default="Logged out")
