from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import FrozenSet, List, Tuple


class AnalysisConfig(BaseModel):
    """Static schema of the analysed dataset, handed to the engine as-is."""
    model_config = ConfigDict(frozen=True)

    label_column: str = "Survived"
    id_column: str = "PassengerId"
    feature_columns: Tuple[str, ...] = ("Pclass", "Sex", "Age", "SibSp", "Parch", "Fare", "Embarked")
    excluded_columns: FrozenSet[str] = frozenset({"PassengerId", "Name", "Ticket", "Cabin"})

    type_sample_size: int = 100
    top_values_limit: int = 10
    preview_rows: int = 10

    correlation_columns: Tuple[str, ...] = ("Age", "Fare", "Survived")
    histogram_columns: Tuple[str, ...] = ("Age", "Fare")
    quantile_columns: Tuple[str, ...] = ("Fare",)
    quantile_bin_count: int = 10
    age_column: str = "Age"
    age_bin_edges: Tuple[float, ...] = (0, 10, 20, 30, 40, 50, 60, 70, 80)

    segment_column: str = "Sex"
    segment_by: str = "Pclass"


_ANALYSIS_DEFAULTS = AnalysisConfig()


class Settings(BaseSettings):
    project_name: str = "Titanic EDA"
    env: str = "dev"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    cors_origins: str = "http://localhost:8501"  # comma-separated

    # Dataset schema, defaulting to AnalysisConfig (lists are read as JSON from the environment)
    label_column: str = _ANALYSIS_DEFAULTS.label_column
    id_column: str = _ANALYSIS_DEFAULTS.id_column
    feature_columns: List[str] = list(_ANALYSIS_DEFAULTS.feature_columns)
    excluded_columns: List[str] = sorted(_ANALYSIS_DEFAULTS.excluded_columns)

    type_sample_size: int = _ANALYSIS_DEFAULTS.type_sample_size
    top_values_limit: int = _ANALYSIS_DEFAULTS.top_values_limit
    preview_rows: int = _ANALYSIS_DEFAULTS.preview_rows

    correlation_columns: List[str] = list(_ANALYSIS_DEFAULTS.correlation_columns)
    histogram_columns: List[str] = list(_ANALYSIS_DEFAULTS.histogram_columns)
    quantile_columns: List[str] = list(_ANALYSIS_DEFAULTS.quantile_columns)
    quantile_bin_count: int = _ANALYSIS_DEFAULTS.quantile_bin_count
    age_column: str = _ANALYSIS_DEFAULTS.age_column
    age_bin_edges: List[float] = list(_ANALYSIS_DEFAULTS.age_bin_edges)

    segment_column: str = _ANALYSIS_DEFAULTS.segment_column
    segment_by: str = _ANALYSIS_DEFAULTS.segment_by

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    def cors_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def analysis_config(self) -> AnalysisConfig:
        return AnalysisConfig(
            label_column=self.label_column,
            id_column=self.id_column,
            feature_columns=tuple(self.feature_columns),
            excluded_columns=frozenset(self.excluded_columns),
            type_sample_size=self.type_sample_size,
            top_values_limit=self.top_values_limit,
            preview_rows=self.preview_rows,
            correlation_columns=tuple(self.correlation_columns),
            histogram_columns=tuple(self.histogram_columns),
            quantile_columns=tuple(self.quantile_columns),
            quantile_bin_count=self.quantile_bin_count,
            age_column=self.age_column,
            age_bin_edges=tuple(self.age_bin_edges),
            segment_column=self.segment_column,
            segment_by=self.segment_by,
        )

settings = Settings()
