# spool_inventory/schemas/base_schemas.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Bundle records are stored with the camelCase keys of the export file."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
