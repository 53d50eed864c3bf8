"""
Base model shared by the Jira API models.
"""

from abc import abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base class for models built from Jira REST API payloads.

    Subclasses implement ``from_api_response`` to read the camelCase API
    shape.
    """

    model_config = ConfigDict(extra="ignore")

    @classmethod
    @abstractmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """Build the model from a raw API payload."""
