from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Role = Literal["user", "creator", "admin"]
ContestStatus = Literal["pending", "approved", "rejected"]

class ApiModel(BaseModel):
    """Wire format is camelCase; field names stay snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class MutationResult(ApiModel):
    matched_count: int
    modified_count: int

class DeleteResult(ApiModel):
    deleted_count: int
