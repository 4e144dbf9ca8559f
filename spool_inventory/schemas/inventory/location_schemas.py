# spool_inventory/schemas/inventory/location_schemas.py

from typing import List
from pydantic import BaseModel, Field

from spool_inventory.schemas.base_schemas import CamelModel


class LocationNode(CamelModel):
    name: str
    path: str
    children: List["LocationNode"] = Field(default_factory=list)


class LocationCreate(BaseModel):
    parent_path: str = ""
    name: str = Field(..., min_length=1, max_length=100)


class LocationRename(BaseModel):
    path: str = Field(..., min_length=1)
    new_name: str = Field(..., min_length=1, max_length=100)


class LocationTreeData(BaseModel):
    tree: List[LocationNode]
    paths: List[str]


class LocationRemoveData(BaseModel):
    removed_paths: List[str]
    cleared_filaments: List[str]
