# primitives/__init__.py
# Import and expose all primitives for easy access

from kpi_outliers.exceptions import PrimitiveError

# Grouping primitives
from .grouping import (
    build_metric_time_series,
    filter_by_period,
    group_observations_by_dimension,
    observations_to_frame,
    sort_latest_first,
)

# Baseline primitives
from .baseline import resolve_baseline, resolve_baseline_observation

# Variance primitives
from .variance import (
    apply_polarity,
    calculate_difference,
    calculate_percent_of_baseline,
    calculate_variance,
    safe_divide,
)

# Classification primitives
from .classification import (
    classify_variance,
    classify_variance_status,
    exceeds_alert_threshold,
    rank_outliers,
)

# Create a dictionary of primitives organized by family
_primitive_families = {
    "grouping": [
        observations_to_frame,
        filter_by_period,
        sort_latest_first,
        group_observations_by_dimension,
        build_metric_time_series,
    ],
    "baseline": [
        resolve_baseline,
        resolve_baseline_observation,
    ],
    "variance": [
        calculate_difference,
        safe_divide,
        calculate_percent_of_baseline,
        apply_polarity,
        calculate_variance,
    ],
    "classification": [
        classify_variance_status,
        classify_variance,
        exceeds_alert_threshold,
        rank_outliers,
    ],
}


def list_primitives_by_family():
    """List all primitives organized by family"""
    result = {}
    for family, funcs in _primitive_families.items():
        result[family] = [func.__name__ for func in funcs]
    return result


def get_primitive_metadata(primitive_name: str):
    """Get metadata for a specific primitive"""
    primitive_func = next(
        (func for funcs in _primitive_families.values() for func in funcs if func.__name__ == primitive_name), None
    )

    if not primitive_func:
        raise PrimitiveError(
            "Primitive not found",
            primitive_name,
            {"code": "PRIMITIVE_NOT_FOUND"},
        )

    # Extract metadata from docstring
    docstring = primitive_func.__doc__ or ""
    lines = [line.strip() for line in docstring.split("\n") if line.strip()]

    # First non-empty line that's not a metadata tag
    description = ""
    for line in lines:
        if not any(line.startswith(tag) for tag in ["Family:", "Version:", "Args:", "Returns:", "Notes:", "Raises:"]):
            description = line
            break

    metadata = {
        "name": primitive_name,
        "description": description,
        "family": "",
        "version": "",
    }

    for line in lines:
        if line.startswith("Family:"):
            metadata["family"] = line.replace("Family:", "").strip()
        elif line.startswith("Version:"):
            metadata["version"] = line.replace("Version:", "").strip()

    return metadata


__all__ = [
    # Grouping primitives
    "observations_to_frame",
    "filter_by_period",
    "sort_latest_first",
    "group_observations_by_dimension",
    "build_metric_time_series",
    # Baseline primitives
    "resolve_baseline",
    "resolve_baseline_observation",
    # Variance primitives
    "calculate_difference",
    "safe_divide",
    "calculate_percent_of_baseline",
    "apply_polarity",
    "calculate_variance",
    # Classification primitives
    "classify_variance_status",
    "classify_variance",
    "exceeds_alert_threshold",
    "rank_outliers",
    # Utility functions
    "list_primitives_by_family",
    "get_primitive_metadata",
]
