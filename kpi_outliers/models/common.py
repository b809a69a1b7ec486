"""
Common models used across the package.
"""

from typing import Any

from pydantic import BaseModel as PydanticBase, ConfigDict


class BaseModel(PydanticBase):
    """Base model for all models"""

    model_config = ConfigDict(use_enum_values=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert the model to a JSON compatible dictionary."""
        return self.model_dump(mode="json")
