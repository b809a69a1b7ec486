"""
Unit tests for the built-in metric catalog.
"""

from kpi_outliers.catalog import DEFAULT_INVERSE_METRIC_CODES, default_metric_definitions


class TestDefaultMetricDefinitions:
    """Tests for the default_metric_definitions function."""

    def test_codes_are_unique_ids(self):
        """Test that every code is unique and doubles as id."""
        definitions = default_metric_definitions()

        codes = [definition.code for definition in definitions]
        assert len(codes) == len(set(codes))
        assert all(definition.id == definition.code for definition in definitions)

    def test_inverse_codes_are_cataloged(self):
        """Test that every inverse code refers to a catalog entry."""
        codes = {definition.code for definition in default_metric_definitions()}

        assert DEFAULT_INVERSE_METRIC_CODES <= codes

    def test_formats(self):
        """Test the format of a few well known metrics."""
        by_code = {definition.code: definition for definition in default_metric_definitions()}

        assert by_code["vacancy_rate"].format == "percentage"
        assert by_code["noi"].format == "currency"
        assert by_code["dscr"].format == "ratio"
