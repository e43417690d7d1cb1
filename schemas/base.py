"""Shared base model for every wire-facing schema.

Python code reads and writes snake_case attributes. The calling layer
(chat tools, dashboard UI) speaks camelCase, so every model carries a
camelCase alias and accepts either spelling on input. FastAPI serializes
response models by alias, which is what puts "lastSeen" rather than
"last_seen" on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """BaseModel with camelCase aliases and name-or-alias population."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
