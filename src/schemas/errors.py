"""
Error Response Schemas

Every error returned by the API has the same shape: {"message": "..."}.
"""

from pydantic import BaseModel, Field


class ErrorMessage(BaseModel):
    message: str = Field(..., description="Human readable error message")
