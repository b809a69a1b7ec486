from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from kpi_outliers.exceptions import PatternError, ValidationError as KpiValidationError
from kpi_outliers.models import BaseModel

T = TypeVar("T", bound=BaseModel)


class Pattern(ABC, Generic[T]):
    """Base class for all analytics patterns."""

    # Class attributes to be defined by subclasses
    name: str = ""
    description: str = ""
    version: str = "1.0"
    required_primitives: list[str] = []
    output_model: type[T]  # Will be defined by subclasses

    def __init__(self) -> None:
        if not self.name:
            self.name = self.__class__.__name__
        if not self.description and self.__doc__:
            self.description = self.__doc__.strip().split("\n")[0]

    @abstractmethod
    def analyze(self, *args, **kwargs) -> T:
        """
        Execute the analysis pattern and return a standardized output.

        Returns:
            Structured output using the pattern's Pydantic model
        """
        pass

    def validate_output(self, output: dict[str, Any] | T) -> T:
        """
        Validate the pattern output against its output model.

        Args:
            output: Dictionary with output data or Pydantic model instance

        Returns:
            Validated Pydantic model instance

        Raises:
            PatternError: If no output model is defined
            KpiValidationError: If output validation fails
        """
        if not getattr(self, "output_model", None):
            raise PatternError(
                "No output model defined for pattern",
                self.name,
                {"pattern_class": self.__class__.__name__},
            )

        try:
            if isinstance(output, self.output_model):
                return output
            return self.output_model.model_validate(output)
        except PydanticValidationError as e:
            raise KpiValidationError(
                f"Invalid output structure for {self.name}", {"validation_errors": e.errors()}
            ) from e

    @staticmethod
    def validate_date_range(start_date: date | None, end_date: date | None) -> None:
        """
        Validate optional date bounds.

        Raises:
            KpiValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise KpiValidationError(
                "Start date must be on or before end date",
                {"start_date": str(start_date), "end_date": str(end_date)},
            )

    @classmethod
    def get_info(cls) -> dict[str, Any]:
        """
        Get pattern information.

        Returns:
            Dictionary with pattern metadata including full output schema
        """
        info: dict[str, Any] = {
            "name": cls.name,
            "description": cls.__doc__.strip().split("\n")[0] if cls.__doc__ else "",
            "version": cls.version,
            "required_primitives": cls.required_primitives,
        }

        if hasattr(cls, "output_model"):
            info["output"] = cls.output_model.model_json_schema()
        else:
            info["output"] = None

        return info
