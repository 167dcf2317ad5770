"""Records API routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Query
from pydantic import BaseModel

from pulse.application.api.v1.params import build, parse_dimensions
from pulse.domain.record.command.create import CreateRecord, CreateRecordHandler
from pulse.domain.record.command.delete import (
    DeleteRecord,
    DeleteRecordHandler,
    DeleteRecords,
    DeleteRecordsHandler,
    PurgeRecords,
    PurgeRecordsHandler,
)
from pulse.domain.record.query.get_record import GetRecord, GetRecordHandler
from pulse.domain.record.query.list_records import (
    CountRecords,
    CountRecordsHandler,
    ListRecords,
    ListRecordsHandler,
)
from pulse.domain.shared.error import ValidationError

router = APIRouter(tags=["records"], route_class=DishkaRoute)

DATE_FIELDS = ("year", "month", "day")
READ_ONLY_FIELDS = ("id", "data_source_id")


class CreatedResponse(BaseModel):
    id: int


class DeletedResponse(BaseModel):
    deleted: int


class CountResponse(BaseModel):
    count: int


@router.post(
    "/projects/{project_uuid}/data_sources/{key}",
    response_model=CreatedResponse,
    status_code=201,
)
async def create_record(
    project_uuid: str,
    key: str,
    handler: FromDishka[CreateRecordHandler],
    body: dict[str, Any] = Body(...),
) -> CreatedResponse:
    """Ingest one record. ``value`` is required; every non-date field is a dimension."""
    fields = dict(body)
    for name in READ_ONLY_FIELDS:
        if name in fields:
            raise ValidationError(f"{name} is assigned by the server", field=name)
    if "value" not in fields:
        raise ValidationError("value is required", field="value")

    value = fields.pop("value")
    dates = {name: fields.pop(name) for name in DATE_FIELDS if name in fields}
    cmd = build(
        CreateRecord,
        project_uuid=project_uuid,
        key=key,
        value=value,
        dimensions=fields,
        **dates,
    )
    result = await handler.run(cmd)
    return CreatedResponse(id=result.id)


@router.get("/records/{record_id}")
async def get_record(
    record_id: int,
    handler: FromDishka[GetRecordHandler],
) -> dict[str, Any]:
    """Get one record, dimensions flattened alongside the fixed fields."""
    result = await handler.run(GetRecord(record_id=record_id))
    return result.flatten()


@router.delete("/records/{record_id}", response_model=DeletedResponse)
async def delete_record(
    record_id: int,
    handler: FromDishka[DeleteRecordHandler],
) -> DeletedResponse:
    result = await handler.run(DeleteRecord(record_id=record_id))
    return DeletedResponse(deleted=result.deleted)


@router.get("/data_sources/{data_source_id}/records")
async def list_records(
    data_source_id: int,
    handler: FromDishka[ListRecordsHandler],
    count: int | None = Query(default=None),
    dimensions: str | None = Query(default=None, description="JSON array of {key, value}"),
) -> list[dict[str, Any]]:
    """List records of a data source in insertion order."""
    result = await handler.run(
        ListRecords(
            data_source_id=data_source_id,
            count=count,
            dimensions=parse_dimensions(dimensions),
        )
    )
    return [item.flatten() for item in result.items]


@router.get("/data_sources/{data_source_id}/records/count", response_model=CountResponse)
async def count_records(
    data_source_id: int,
    handler: FromDishka[CountRecordsHandler],
    year: int | None = None,
    month: int | None = None,
    day: int | None = None,
    dimensions: str | None = Query(default=None, description="JSON array of {key, value}"),
) -> CountResponse:
    result = await handler.run(
        CountRecords(
            data_source_id=data_source_id,
            year=year,
            month=month,
            day=day,
            dimensions=parse_dimensions(dimensions),
        )
    )
    return CountResponse(count=result.count)


@router.delete("/projects/{project_uuid}/data_sources/{key}", response_model=DeletedResponse)
async def delete_records(
    project_uuid: str,
    key: str,
    handler: FromDishka[DeleteRecordsHandler],
    year: int | None = None,
    month: int | None = None,
    day: int | None = None,
    dimensions: str | None = Query(default=None, description="JSON array of {key, value}"),
) -> DeletedResponse:
    """Delete records matching the filter. No filter deletes nothing."""
    result = await handler.run(
        DeleteRecords(
            project_uuid=project_uuid,
            key=key,
            year=year,
            month=month,
            day=day,
            dimensions=parse_dimensions(dimensions),
        )
    )
    return DeletedResponse(deleted=result.deleted)


@router.delete(
    "/projects/{project_uuid}/data_sources/{key}/records/all",
    response_model=DeletedResponse,
)
async def purge_records(
    project_uuid: str,
    key: str,
    handler: FromDishka[PurgeRecordsHandler],
) -> DeletedResponse:
    """Delete every record of a data source. Requires ADMIN on the project."""
    result = await handler.run(PurgeRecords(project_uuid=project_uuid, key=key))
    return DeletedResponse(deleted=result.deleted)
