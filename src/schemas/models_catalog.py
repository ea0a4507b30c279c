"""
Pydantic schemas for the model listing
"""

from pydantic import BaseModel, Field


class ModelDescriptor(BaseModel):
    """One entry of GET /api/models"""

    id: str = Field(..., description="Model identifier, unique within one listing")
    name: str = Field(..., description="Model display name")
    provider: str = Field(..., description="Builtin provider tag, or 'custom' for tenant models")
    model_id: str = Field(..., description="Identifier sent to the provider")
    context_length: int | None = Field(None, description="Maximum context length, if known")
