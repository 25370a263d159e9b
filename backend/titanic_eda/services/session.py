# backend/titanic_eda/services/session.py

from threading import RLock
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from .dataset import ColumnKind, Dataset, merge
from .inference import infer_types
from .profiling import build_report
from ..core.config import AnalysisConfig, settings
from ..core.errors import NoDatasetError
from ..schemas.analysis import AnalysisReport

_lock = RLock()


class Session:
    """Holds the current Dataset and the last report; each load replaces both."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or settings.analysis_config()
        self._dataset: Optional[Dataset] = None
        self._kinds: Optional[Dict[str, ColumnKind]] = None
        self._report: Optional[AnalysisReport] = None

    # ----------------------------------------------------
    # DATASET METHODS
    # ----------------------------------------------------
    def load(self, train_records: List[Mapping[str, Any]], test_records: List[Mapping[str, Any]]) -> Dataset:
        dataset = merge(train_records, test_records)
        kinds = infer_types(dataset, self.config.type_sample_size)
        with _lock:
            self._dataset = dataset
            self._kinds = kinds
            self._report = None
        return dataset

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    @property
    def dataset(self) -> Dataset:
        if self._dataset is None:
            raise NoDatasetError("Please load data first")
        return self._dataset

    @property
    def kinds(self) -> Dict[str, ColumnKind]:
        if self._kinds is None:
            raise NoDatasetError("Please load data first")
        return self._kinds

    # ----------------------------------------------------
    # REPORT METHODS
    # ----------------------------------------------------
    def run_analysis(self) -> AnalysisReport:
        with _lock:
            dataset, kinds = self.dataset, self.kinds
        report = build_report(dataset, self.config, kinds=kinds)
        with _lock:
            # A concurrent reload wins; its report slot stays empty.
            if self._dataset is dataset:
                self._report = report
        return report

    @property
    def report(self) -> Optional[AnalysisReport]:
        return self._report

    def reset(self):
        with _lock:
            self._dataset = None
            self._kinds = None
            self._report = None
        logger.info("Session reset")


# =============================================================
# GLOBAL SESSION INSTANCE
# =============================================================
session = Session()


# =============================================================
# Top-Level Helper Functions (used by routers & tests)
# =============================================================
def load(train_records, test_records):
    return session.load(train_records, test_records)

def get_dataset():
    return session.dataset

def get_kinds():
    return session.kinds

def get_report():
    return session.report

def run_analysis():
    return session.run_analysis()

def reset():
    return session.reset()

def get_config():
    return session.config
