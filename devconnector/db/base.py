"""Base class for all document models."""

from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class MongoModel(BaseModel):
    """Pydantic model stored as a MongoDB document (or embedded sub-document)."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    # Common field for all documents
    id: ObjectId = Field(default_factory=ObjectId, alias="_id")

    def to_mongo(self) -> Dict[str, Any]:
        """Serialize for pymongo, keeping ObjectId and datetime values native."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_mongo(cls, document: Optional[Mapping[str, Any]]):
        if document is None:
            return None
        return cls.model_validate(document)
