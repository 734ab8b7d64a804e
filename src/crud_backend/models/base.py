"""
Shared Pydantic configuration for API models
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase on the wire, accepts camelCase or snake_case input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
