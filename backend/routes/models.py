"""Pydantic request models for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SaveFronts(BaseModel):
    fronts: list[dict[str, Any]]


class ToggleSecret(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    danger_id: str = Field(alias="dangerId")
    secret_id: str = Field(alias="secretId")


class TogglePortent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    danger_id: str = Field(alias="dangerId")
    portent_id: str = Field(alias="portentId")
