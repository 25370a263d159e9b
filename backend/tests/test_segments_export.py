# backend/tests/test_segments_export.py
import csv
import io
import json
from datetime import datetime, timezone

import pytest

from backend.titanic_eda.core.config import AnalysisConfig
from backend.titanic_eda.core.errors import DatasetShapeError, ExportFailure
from backend.titanic_eda.services.dataset import merge
from backend.titanic_eda.services.export import dataset_to_csv, report_to_json
from backend.titanic_eda.services.profiling import build_overview, build_preview, build_report
from backend.titanic_eda.services.segments import analyze_segments, rate_ratio, segment_rates


# -----------------------------------------------------------
# SEGMENTS
# -----------------------------------------------------------
def test_segment_rates_by_class(titanic_batches):
    ds = merge(*titanic_batches)
    rates = segment_rates(ds, "Sex", "Pclass", "Survived")

    # classes sorted numerically, sexes in first-seen order
    keys = [(r.by_value, r.value) for r in rates]
    assert keys == [("1", "male"), ("1", "female"), ("3", "male"), ("3", "female")]

    lookup = {(r.by_value, r.value): r for r in rates}
    assert lookup[("1", "female")].positive_rate == 100.0
    assert lookup[("3", "male")].count == 4
    assert lookup[("3", "male")].positive == 0
    # class 2 only appears in the test split
    assert all(r.by_value != "2" for r in rates)


def test_analyze_segments_ratio(titanic_batches):
    ds = merge(*titanic_batches)
    analysis = analyze_segments(ds, "Sex", "Pclass", "Survived")

    overall = {r.value: r for r in analysis.overall}
    assert overall["female"].positive_rate == 100.0
    assert overall["male"].positive_rate == 0.0
    assert analysis.ratio_pair == ["female", "male"]
    # male rate is zero, so the ratio is undefined
    assert analysis.rate_ratio is None


def test_rate_ratio(train_batch, test_batch):
    train = train_batch + [{"PassengerId": 4, "Sex": "male", "Age": 30, "Survived": 1},
                           {"PassengerId": 5, "Sex": "female", "Age": 30, "Survived": 1}]
    ds = merge(train, test_batch)
    analysis = analyze_segments(ds, "Sex", "Sex", "Survived")
    assert rate_ratio(analysis.overall, "female", "male") == pytest.approx(2.0)


def test_segments_unknown_column(titanic_batches):
    ds = merge(*titanic_batches)
    with pytest.raises(DatasetShapeError):
        segment_rates(ds, "Sex", "Deck", "Survived")


# -----------------------------------------------------------
# REPORT ASSEMBLY
# -----------------------------------------------------------
def test_build_overview_roles(titanic_batches):
    ds = merge(*titanic_batches)
    overview = build_overview(ds, AnalysisConfig())

    assert overview["rows"] == 11
    assert (overview["train_rows"], overview["test_rows"]) == (8, 3)
    assert overview["label_available"] == 8
    assert overview["label_missing"] == 3
    roles = {c["name"]: c["role"] for c in overview["columns"]}
    assert roles["Survived"] == "target"
    assert roles["Age"] == "feature"
    assert roles["Cabin"] == "excluded"
    assert roles["origin"] == "other"


def test_build_preview_keeps_append_order(titanic_batches):
    ds = merge(*titanic_batches)
    preview = build_preview(ds, n=10)
    assert len(preview["data"]) == 10
    assert preview["data"][0]["PassengerId"] == 1
    assert preview["data"][-1]["origin"] == "test"
    assert preview["columns"][-1] == "origin"


def test_build_report_bundle(titanic_batches):
    ds = merge(*titanic_batches)
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    report = build_report(ds, AnalysisConfig(), now=now)

    assert report.metadata.generated_at == now.isoformat()
    assert report.metadata.total_rows == 11
    assert "PassengerId" not in report.missing
    assert "Name" not in report.summaries
    assert report.correlation.columns == ["Age", "Fare", "Survived"]
    methods = {(h.column, h.method) for h in report.histograms}
    assert methods == {("Age", "equal_width"), ("Fare", "equal_width"), ("Fare", "quantile"), ("Age", "fixed")}
    assert report.segments is not None
    assert report.label_overview.positive == 3

    # pure for a fixed timestamp
    assert build_report(ds, AnalysisConfig(), now=now) == report


# -----------------------------------------------------------
# EXPORT
# -----------------------------------------------------------
def test_dataset_to_csv(titanic_batches):
    ds = merge(*titanic_batches)
    rows = list(csv.reader(io.StringIO(dataset_to_csv(ds))))

    assert rows[0] == ds.columns
    assert len(rows) == 1 + ds.row_count
    assert [r[-1] for r in rows[1:]] == ["train"] * 8 + ["test"] * 3
    # absent values become empty fields
    survived = rows[0].index("Survived")
    assert rows[-1][survived] == ""


def test_report_to_json(titanic_batches):
    ds = merge(*titanic_batches)
    report = build_report(ds, AnalysisConfig())
    payload = json.loads(report_to_json(report))

    assert payload["metadata"]["train_rows"] == 8
    assert "missing" in payload and "summaries" in payload
    assert payload["summaries"]["Sex"]["kind"] == "categorical"


def test_report_to_json_requires_report():
    with pytest.raises(ExportFailure):
        report_to_json(None)
