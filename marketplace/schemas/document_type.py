"""Document type Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from marketplace.schemas.common import CamelModel


class DocumentTypeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class DocumentTypeUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)


class DocumentTypeOut(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
