"""
Base wire models shared by GuestLine payloads
"""

from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


TModel = TypeVar("TModel", bound="WireModel")


class WireModel(BaseModel):
    """Base for every model exchanged with GuestLine"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_json_string(cls: Type[TModel], text: Union[str, bytes]) -> TModel:
        """Decode a model from raw GuestLine JSON (e.g. captured response content)"""
        return cls.model_validate_json(text)

    def to_json_string(self) -> str:
        """Encode the model the way it is sent on the wire"""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class Result(WireModel):
    """Top-level response payload carrying GuestLine's tracking metadata"""

    tracking_id: Optional[str] = Field(default=None, alias="trackingId")
    status: Optional[str] = None
    error: Optional[str] = None
