"""
Tests for analyzer configuration and the bounded cache.
"""

import pytest

from survey_analyzer.core.cache import BoundedCache
from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.exceptions import ConfigurationError


class TestValidation:

    def test_defaults_are_valid(self, config):
        config.validate()
        assert config.risk_high_threshold == 50
        assert config.risk_moderate_threshold == 30
        assert config.priority_threshold == 40
        assert config.fallback_category == "Otro"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"risk_high_threshold": 30, "risk_moderate_threshold": 30},
            {"risk_moderate_threshold": -1},
            {"priority_threshold": -5},
            {"high_pain_threshold": 11},
            {"conversion_high_threshold": 0.4, "conversion_medium_threshold": 0.4},
            {"conversion_high_threshold": 1.5},
            {"fallback_category": "Sin clasificar"},
            {"diagnosis_keywords": {"Apendicitis": ("apend",)}},
            {"cache_capacity": 0},
            {"top_symptom_limit": 0},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            AnalyzerConfiguration(**overrides).validate()

    def test_keyword_tables_are_not_shared(self):
        first = AnalyzerConfiguration()
        first.diagnosis_keywords["Otro"] = ("lipoma",)
        assert "Otro" not in AnalyzerConfiguration().diagnosis_keywords

    def test_to_dict(self, config):
        data = config.to_dict()
        assert data["priority_threshold"] == 40
        assert data["diagnosis_categories"][-1] == "Otro"


class TestFromEnvironment:

    def test_defaults_without_environment(self, clean_env):
        assert AnalyzerConfiguration.from_environment() == AnalyzerConfiguration()

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("ANALYZER_RISK_HIGH_THRESHOLD", "60")
        clean_env.setenv("ANALYZER_CONVERSION_HIGH_THRESHOLD", "0.8")
        config = AnalyzerConfiguration.from_environment()
        assert config.risk_high_threshold == 60
        assert config.conversion_high_threshold == 0.8

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / "analyzer.env"
        env_file.write_text("ANALYZER_PRIORITY_THRESHOLD=45\n", encoding="utf-8")
        config = AnalyzerConfiguration.from_environment(env_file=str(env_file))
        assert config.priority_threshold == 45

    def test_non_numeric_value(self, clean_env):
        clean_env.setenv("ANALYZER_CACHE_CAPACITY", "lots")
        with pytest.raises(ConfigurationError):
            AnalyzerConfiguration.from_environment()

    def test_invalid_value_fails_validation(self, clean_env):
        clean_env.setenv("ANALYZER_RISK_MODERATE_THRESHOLD", "80")
        with pytest.raises(ConfigurationError):
            AnalyzerConfiguration.from_environment()
        config = AnalyzerConfiguration.from_environment(validate_on_load=False)
        assert config.risk_moderate_threshold == 80


class TestBoundedCache:

    def test_capacity_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            BoundedCache(capacity=0)

    def test_evicts_least_recently_used(self):
        cache = BoundedCache(capacity=2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.get("a") == 1
        cache.set("c", 3)

        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_hit_and_miss_counters(self):
        cache = BoundedCache(capacity=4)
        cache.set("a", 1)
        cache.get("a")
        cache.get("missing")
        assert cache.stats() == {"size": 1, "capacity": 4, "hits": 1, "misses": 1}

        cache.clear()
        assert cache.stats() == {"size": 0, "capacity": 4, "hits": 0, "misses": 0}
