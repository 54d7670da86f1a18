"""
Base schemas with common functionality.
"""
from typing import Type, TypeVar, Any
from pydantic import BaseModel, ConfigDict

T = TypeVar('T', bound='BaseSchema')


class BaseSchema(BaseModel):
    """Base schema with common functionality for all schemas"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True
    )

    @classmethod
    def from_document(cls: Type[T], document: Any) -> T:
        """Create a schema instance from a store document or ORM model"""
        return cls.model_validate(document)
