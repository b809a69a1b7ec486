from typing import Any, TypeAlias

# Type aliases for common types
ErrorDetails: TypeAlias = dict[str, Any]
InvalidFields: TypeAlias = dict[str, Any]


class KpiOutliersError(Exception):
    """Base exception for all kpi_outliers errors"""

    def __init__(self, message: str, details: ErrorDetails | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(KpiOutliersError):
    """Exception raised when input validation fails"""

    def __init__(self, message: str, invalid_fields: InvalidFields | None = None) -> None:
        details = {"invalid_fields": invalid_fields or {}}
        super().__init__(message, details)
        self.invalid_fields = invalid_fields or {}


class ConfigurationAbsentError(KpiOutliersError):
    """Exception raised when a metric has neither a policy nor a system default"""

    def __init__(self, message: str, metric_id: str, details: ErrorDetails | None = None) -> None:
        config_details = {"metric_id": metric_id, **(details or {})}
        super().__init__(message, config_details)
        self.metric_id = metric_id


class DataSourceError(KpiOutliersError):
    """Exception raised when an upstream data source fails to load"""

    def __init__(self, message: str, source_name: str, details: ErrorDetails | None = None) -> None:
        source_details = {"source_name": source_name, **(details or {})}
        super().__init__(message, source_details)
        self.source_name = source_name


class PatternError(KpiOutliersError):
    """Exception raised for pattern-specific errors"""

    def __init__(self, message: str, pattern_name: str, details: ErrorDetails | None = None):
        pattern_details = {"pattern_name": pattern_name, **(details or {})}
        super().__init__(message, pattern_details)
        self.pattern_name = pattern_name


class PrimitiveError(KpiOutliersError):
    """Exception raised for primitive-specific errors"""

    def __init__(self, message: str, primitive_name: str, details: ErrorDetails | None = None):
        primitive_details = {"primitive_name": primitive_name, **(details or {})}
        super().__init__(message, primitive_details)
        self.primitive_name = primitive_name
