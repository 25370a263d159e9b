# backend/titanic_eda/routers/ingest.py
from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from loguru import logger

from ..core.errors import EmptyInputError, NoDatasetError, ParseFailure
from ..services import session as session_service
from ..services.profiling import build_overview, build_preview
from ..schemas.base import APIResponse
from ..schemas.dataset import DatasetOverviewResponse, DatasetPreviewResponse
from ..utils.io import read_csv_records

router = APIRouter(tags=["ingest"])


def _current():
    try:
        return session_service.get_dataset(), session_service.get_kinds()
    except NoDatasetError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/upload", response_model=DatasetOverviewResponse)
def upload(train: UploadFile = File(...), test: UploadFile = File(...)) -> DatasetOverviewResponse:
    """
    Parse train.csv and test.csv, merge them (origin-tagged) and replace the current dataset.
    """
    try:
        train_records = read_csv_records(train.file.read(), name=train.filename or "train.csv")
        test_records = read_csv_records(test.file.read(), name=test.filename or "test.csv")
    except ParseFailure as e:
        logger.warning(str(e))
        raise HTTPException(status_code=400, detail=str(e))

    try:
        dataset = session_service.load(train_records, test_records)
    except EmptyInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    overview = build_overview(dataset, session_service.get_config(), kinds=session_service.get_kinds())
    return DatasetOverviewResponse(ok=True, **overview)


@router.get("/overview", response_model=DatasetOverviewResponse)
def get_overview() -> DatasetOverviewResponse:
    dataset, kinds = _current()
    overview = build_overview(dataset, session_service.get_config(), kinds=kinds)
    return DatasetOverviewResponse(ok=True, **overview)


@router.get("/preview", response_model=DatasetPreviewResponse)
def get_preview(n: int = Query(10, ge=1, le=1000)) -> DatasetPreviewResponse:
    """
    Return the first N merged rows, with column order and inferred kinds.
    """
    dataset, kinds = _current()
    payload = build_preview(dataset, n=n)
    return DatasetPreviewResponse(
        ok=True,
        rows=payload["rows"],
        cols=payload["cols"],
        columns=payload["columns"],
        kinds={col: kind.value for col, kind in kinds.items()},
        data=payload["data"],
    )


@router.delete("", response_model=APIResponse)
def reset() -> APIResponse:
    session_service.reset()
    return APIResponse(ok=True, message="Session reset")
