# backend/tests/test_config.py
from backend.titanic_eda.core.config import AnalysisConfig, Settings


def test_settings_defaults_match_analysis_config():
    s = Settings(_env_file=None)
    assert s.analysis_config() == AnalysisConfig()


def test_settings_overrides_reach_analysis_config():
    s = Settings(_env_file=None, label_column="Target", excluded_columns=["Name"], quantile_bin_count=4)
    cfg = s.analysis_config()

    assert cfg.label_column == "Target"
    assert cfg.excluded_columns == frozenset({"Name"})
    assert cfg.quantile_bin_count == 4
    # untouched fields keep the engine defaults
    assert cfg.feature_columns == AnalysisConfig().feature_columns


def test_cors_list_splits_and_strips():
    s = Settings(_env_file=None, cors_origins="http://a, http://b ,")
    assert s.cors_list() == ["http://a", "http://b"]
