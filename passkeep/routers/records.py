from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from passkeep.domain.records import Record, Storage, storage_to_dict
from passkeep.domain.validation import ValidationError
from passkeep.repositories.json_storage import StorageWriteError
from passkeep.services.record_service import (
    RecordService,
    RecordExistsError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["records"])


class RecordPayload(BaseModel):
    type: str = ""
    password: str = ""
    description: str = ""
    additional: str = ""
    favorite: bool = False

    def to_record(self) -> Record:
        return Record(
            type=self.type,
            password=self.password,
            description=self.description,
            additional=self.additional,
            favorite=self.favorite,
        )


def _get_record_service(request: Request) -> RecordService:
    svc = getattr(getattr(request.app, "state", None), "record_service", None)
    if not svc:
        raise RuntimeError("RecordService not configured")
    return svc


def _json(storage: Storage) -> dict:
    return storage_to_dict(storage)


def _mutation_failed(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(400, str(exc))
    if isinstance(exc, RecordExistsError):
        return HTTPException(409, str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(404, str(exc))
    logger.error("record saved in memory but not on disk: %s", exc)
    return HTTPException(500, "record stored in memory but the vault file could not be written")


@router.get("/get-all")
def get_all(request: Request):
    svc = _get_record_service(request)
    return _json(svc.get_all())


@router.get("/get-by-type")
def get_by_type(request: Request, record_type: str = Query("", alias="type")):
    svc = _get_record_service(request)
    try:
        storage = svc.get_by_type(record_type)
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    return _json(storage)


@router.get("/get")
def get_by_name(request: Request, name: str = ""):
    svc = _get_record_service(request)
    try:
        record = svc.get_by_name(name)
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc))
    return record.to_dict()


@router.post("/add")
def add(payload: RecordPayload, request: Request, name: str = ""):
    svc = _get_record_service(request)
    try:
        svc.append(name, payload.to_record())
    except (ValidationError, RecordExistsError, StorageWriteError) as exc:
        raise _mutation_failed(exc)
    return {"ok": True}


@router.put("/update")
def update(payload: RecordPayload, request: Request, name: str = ""):
    svc = _get_record_service(request)
    try:
        svc.update_by_name(name, payload.to_record())
    except (ValidationError, RecordNotFoundError, StorageWriteError) as exc:
        raise _mutation_failed(exc)
    return {"ok": True}


@router.delete("/delete")
def delete(request: Request, name: str = ""):
    svc = _get_record_service(request)
    try:
        svc.delete_by_name(name)
    except (ValidationError, RecordNotFoundError, StorageWriteError) as exc:
        raise _mutation_failed(exc)
    return {"ok": True}


@router.post("/flush")
def flush(request: Request):
    svc = _get_record_service(request)
    try:
        svc.persist_to_file()
    except StorageWriteError as exc:
        logger.error("manual flush failed: %s", exc)
        raise HTTPException(500, "vault file could not be written")
    return {"ok": True}
