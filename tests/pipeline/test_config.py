"""
Unit tests for pipeline configuration.
"""
import pytest

from market_climate.pipeline.config import (
    PipelineConfig,
    config_from_dict,
    load_pipeline_config,
)
from market_climate.services.errors import ConfigError


class TestPipelineConfig:
    """Tests for PipelineConfig dataclass."""

    def test_default_config(self):
        """Test default configuration values."""
        config = PipelineConfig()

        assert config.date_column == "Date"
        assert config.series_column == "Asset"
        assert config.value_column == "Price"
        assert config.series_order == "first_seen"
        assert config.date_order == "calendar"
        assert config.granularity == "daily"
        assert config.reference_series == "S&P_500_Price"
        assert config.strong_streak_threshold == 2
        assert config.excluded_series == ()
        assert config.value_prefix == "$"

    def test_immutability(self):
        """Test that config is immutable (frozen dataclass)."""
        config = PipelineConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.series_order = "sorted"  # type: ignore

    def test_excluded_series_list_becomes_tuple(self):
        config = PipelineConfig(excluded_series=["Oil_Price"])  # type: ignore

        assert config.excluded_series == ("Oil_Price",)

    def test_excluded_series_string_is_one_series(self):
        config = config_from_dict({"excluded_series": "Gold_Price"})

        assert config.excluded_series == ("Gold_Price",)

    def test_invalid_series_order(self):
        with pytest.raises(ValueError, match="Invalid series_order"):
            PipelineConfig(series_order="random")  # type: ignore

    def test_invalid_date_order(self):
        with pytest.raises(ValueError, match="Invalid date_order"):
            PipelineConfig(date_order="natural")  # type: ignore

    def test_invalid_granularity(self):
        with pytest.raises(ValueError, match="Invalid granularity"):
            PipelineConfig(granularity="weekly")  # type: ignore

    def test_monthly_requires_calendar_order(self):
        with pytest.raises(ValueError, match="monthly granularity"):
            PipelineConfig(granularity="monthly", date_order="lexical")

    def test_threshold_validation(self):
        with pytest.raises(ValueError, match="strong_streak_threshold"):
            PipelineConfig(strong_streak_threshold=0)

    def test_delimiter_validation(self):
        with pytest.raises(ValueError, match="delimiter"):
            PipelineConfig(delimiter=";;")

    def test_empty_column_name_rejected(self):
        with pytest.raises(ValueError, match="date_column"):
            PipelineConfig(date_column="")


class TestLoadPipelineConfig:
    """Tests for YAML config loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text(
            "series_order: sorted\n"
            "excluded_series:\n"
            "  - Oil_Price\n"
            "granularity: monthly\n",
            encoding="utf-8",
        )

        config = load_pipeline_config(path)

        assert config.series_order == "sorted"
        assert config.excluded_series == ("Oil_Price",)
        assert config.granularity == "monthly"

    def test_scalar_excluded_series(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text("excluded_series: Bitcoin_Price\n", encoding="utf-8")

        config = load_pipeline_config(path)

        assert config.excluded_series == ("Bitcoin_Price",)

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_pipeline_config(path) == PipelineConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_pipeline_config(tmp_path / "nope.yaml")

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="YAML mapping"):
            load_pipeline_config(path)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigError, match="Unknown pipeline config keys"):
            config_from_dict({"colour": "red"})
