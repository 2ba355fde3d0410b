from typing import Any

from pydantic import BaseModel, ConfigDict


class ApiEnvelope(BaseModel):
    """``{success, data, message}`` wrapper returned by every endpoint."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    data: Any = None
    message: str | None = None


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    error: str | None = None

    def text(self, fallback: str) -> str:
        return self.message or self.error or fallback
