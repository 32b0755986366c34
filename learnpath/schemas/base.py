"""
Shared pydantic base for LearnPath documents.

Catalog files and persisted documents use camelCase keys
(learningItems, completedAt, passingScore); Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
