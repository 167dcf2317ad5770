"""RecordService against the SQL repositories."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.project.model.data_source import DataSource
from pulse.domain.project.model.value import DataSourceId
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.project.service.project import ProjectService
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.value import DimensionFilter, RecordFilter, RecordId
from pulse.domain.record.service.record import RecordService
from pulse.domain.shared.error import InvalidFilterError, NotFoundError, UnknownReferenceError
from pulse.infrastructure.persistence.repository.project import (
    SQLDataSourceRepository,
    SQLProjectRepository,
)
from pulse.infrastructure.persistence.repository.record import SQLRecordRepository


@pytest_asyncio.fixture
async def data_source(session: AsyncSession) -> DataSource:
    project_repo = SQLProjectRepository(session)
    project = await ProjectService(project_repo=project_repo).create("Demo")
    service = DataSourceService(
        data_source_repo=SQLDataSourceRepository(session), project_repo=project_repo
    )
    assert project.id is not None
    return await service.create(
        project.id,
        "sessions",
        "Sessions",
        [{"key": "client", "name": "Client"}, {"key": "country", "name": "Country"}],
    )


@pytest.fixture
def record_service(session: AsyncSession) -> RecordService:
    return RecordService(
        record_repo=SQLRecordRepository(session),
        data_source_repo=SQLDataSourceRepository(session),
    )


async def _seed(service: RecordService, data_source_id: DataSourceId) -> list[RecordId]:
    rows = [
        (1.0, 2024, 1, 1, {"client": "ANDROID", "country": "DE"}),
        (2.0, 2024, 1, 2, {"client": "ANDROID", "country": "FR"}),
        (3.0, 2024, 2, 1, {"client": "IOS", "country": "DE"}),
    ]
    return [
        await service.save(
            Record.create(data_source_id, value, dims, year=year, month=month, day=day)
        )
        for value, year, month, day, dims in rows
    ]


class TestRecordStore:
    @pytest.mark.asyncio
    async def test_save_and_get_round_trip(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        record_id = await record_service.save(
            Record.create(
                data_source.id, 4.5, {"client": "WEB", "build": 311, "beta": True}, 2024, 5, 6
            )
        )

        record = await record_service.get(record_id)

        assert record is not None
        assert record.value == 4.5
        assert (record.year, record.month, record.day) == (2024, 5, 6)
        assert record.dimensions == {"client": "WEB", "build": 311, "beta": True}

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, record_service: RecordService):
        assert await record_service.get(RecordId(999)) is None

    @pytest.mark.asyncio
    async def test_save_for_unknown_data_source(self, record_service: RecordService):
        with pytest.raises(UnknownReferenceError):
            await record_service.save(Record.create(DataSourceId(999), 1.0))

    @pytest.mark.asyncio
    async def test_repository_translates_foreign_key_failure(self, session: AsyncSession):
        repo = SQLRecordRepository(session)

        with pytest.raises(UnknownReferenceError):
            await repo.save(Record.create(DataSourceId(999), 1.0))

    @pytest.mark.asyncio
    async def test_list_filters_and_limits(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        android = await record_service.list(
            data_source.id, dimensions=[DimensionFilter(key="client", value="ANDROID")]
        )
        first = await record_service.list(data_source.id, count=2)
        combined = await record_service.list(
            data_source.id,
            dimensions=[
                DimensionFilter(key="client", value="ANDROID"),
                DimensionFilter(key="country", value="FR"),
            ],
        )

        assert [r.id for r in android] == ids[:2]
        assert [r.id for r in first] == ids[:2]
        assert [r.id for r in combined] == [ids[1]]

    @pytest.mark.asyncio
    async def test_list_by_fixed_column(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        february = await record_service.list(
            data_source.id, dimensions=[DimensionFilter(key="month", value="2")]
        )

        assert [r.id for r in february] == [ids[2]]

    @pytest.mark.asyncio
    async def test_list_with_zero_count_is_empty(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        await _seed(record_service, data_source.id)

        assert await record_service.list(data_source.id, count=0) == []

    @pytest.mark.asyncio
    async def test_undeclared_key_never_reaches_storage(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None

        with pytest.raises(InvalidFilterError):
            await record_service.list(
                data_source.id,
                dimensions=[DimensionFilter(key="client; DROP TABLE records", value="x")],
            )

    @pytest.mark.asyncio
    async def test_list_unknown_data_source(self, record_service: RecordService):
        with pytest.raises(NotFoundError):
            await record_service.list(DataSourceId(999))

    @pytest.mark.asyncio
    async def test_count(self, record_service: RecordService, data_source: DataSource):
        assert data_source.id is not None
        await _seed(record_service, data_source.id)

        assert await record_service.count(data_source.id) == 3
        assert (
            await record_service.count(
                data_source.id,
                RecordFilter(dimensions=(DimensionFilter(key="client", value="ANDROID"),)),
            )
            == 2
        )

    @pytest.mark.asyncio
    async def test_remove_by_filter(self, record_service: RecordService, data_source: DataSource):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        deleted = await record_service.remove_by_filter(
            data_source.id, RecordFilter(year=2024, month=1)
        )

        assert deleted == 2
        remaining = await record_service.list(data_source.id)
        assert [r.id for r in remaining] == [ids[2]]

    @pytest.mark.asyncio
    async def test_empty_filter_deletes_nothing(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        await _seed(record_service, data_source.id)

        assert await record_service.remove_by_filter(data_source.id, RecordFilter()) == 0
        assert await record_service.count(data_source.id) == 3

    @pytest.mark.asyncio
    async def test_remove_all(self, record_service: RecordService, data_source: DataSource):
        assert data_source.id is not None
        await _seed(record_service, data_source.id)

        assert await record_service.remove_all(data_source.id) == 3
        assert await record_service.count(data_source.id) == 0

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        await record_service.remove(ids[0])
        await record_service.remove(ids[0])

        assert await record_service.get(ids[0]) is None
        assert await record_service.count(data_source.id) == 2

    @pytest.mark.asyncio
    async def test_whole_float_filter_matches_int_dimension(
        self, record_service: RecordService, session: AsyncSession
    ):
        project_repo = SQLProjectRepository(session)
        project = await ProjectService(project_repo=project_repo).create("Builds")
        assert project.id is not None
        data_source = await DataSourceService(
            data_source_repo=SQLDataSourceRepository(session), project_repo=project_repo
        ).create(project.id, "builds", "Builds", [{"key": "build"}])
        assert data_source.id is not None
        await record_service.save(Record.create(data_source.id, 1.0, {"build": 3}))

        found = await record_service.list(
            data_source.id, dimensions=[DimensionFilter(key="build", value=3.0)]
        )

        assert len(found) == 1

    @pytest.mark.asyncio
    async def test_deleting_data_source_cascades_to_records(
        self, record_service: RecordService, data_source: DataSource, session: AsyncSession
    ):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        assert await SQLDataSourceRepository(session).delete(data_source.id)

        assert await record_service.get(ids[0]) is None

    @pytest.mark.asyncio
    async def test_remove_by_full_date(self, record_service: RecordService, data_source: DataSource):
        assert data_source.id is not None
        for day, client in ((28, "ANDROID"), (28, "IOS"), (29, "ANDROID")):
            await record_service.save(
                Record.create(data_source.id, 1.0, {"client": client}, year=2014, month=6, day=day)
            )

        first = await record_service.remove_by_filter(
            data_source.id, RecordFilter(year=2014, month=6, day=28)
        )
        assert first == 2
        assert await record_service.count(data_source.id) == 1

        second = await record_service.remove_by_filter(
            data_source.id, RecordFilter(year=2014, month=6, day=29)
        )
        assert second == 1
        assert await record_service.count(data_source.id) == 0

    @pytest.mark.asyncio
    async def test_count_larger_than_matches_returns_all_matches(
        self, record_service: RecordService, data_source: DataSource
    ):
        assert data_source.id is not None
        ids = await _seed(record_service, data_source.id)

        android = await record_service.list(
            data_source.id,
            count=10,
            dimensions=[DimensionFilter(key="client", value="ANDROID")],
        )

        assert [r.id for r in android] == ids[:2]

    @pytest.mark.asyncio
    async def test_remove_by_dimension(self, record_service: RecordService, data_source: DataSource):
        assert data_source.id is not None
        await _seed(record_service, data_source.id)

        deleted = await record_service.remove_by_filter(
            data_source.id,
            RecordFilter(dimensions=(DimensionFilter(key="client", value="ANDROID"),)),
        )

        remaining = await record_service.list(data_source.id)
        assert deleted == 2
        assert [r.dimensions["client"] for r in remaining] == ["IOS"]
