"""
Tests for the SQLAlchemy template repository
"""

import gzip
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from template_store.db.models import Template, generate_uuid
from template_store.domain.templates import OwnerType, TemplateNotFoundError, TemplateSortBy
from template_store.infrastructure.database.errors import is_unique_violation

from .conftest import OWNER_ID

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _template(name: str, usage_count: int = 0, minutes: int = 0, **overrides) -> Template:
    values = {
        "id": generate_uuid(),
        "owner_id": OWNER_ID,
        "owner_type": OwnerType.USER,
        "template_type": "checklist",
        "name": name,
        "body": "{}",
        "usage_count": usage_count,
        "created_at": BASE_TIME + timedelta(minutes=minutes),
    }
    values.update(overrides)
    return Template(**values)


async def _seed(repository, *templates: Template) -> list[Template]:
    for template in templates:
        await repository.add(template)
    return list(templates)


class TestReads:
    """Tests for lookups and detached results."""

    async def test_get_by_id_missing_returns_none(self, repository):
        assert await repository.get_by_id(generate_uuid()) is None

    async def test_get_by_id_ignores_owner(self, repository):
        (template,) = await _seed(repository, _template("Daily", owner_type=OwnerType.ORGANIZATION))

        found = await repository.get_by_id(template.id)

        assert found is not None
        assert found.owner_type is OwnerType.ORGANIZATION

    async def test_reads_are_not_tracked(self, repository, session):
        (template,) = await _seed(repository, _template("Daily"))

        loaded = await repository.get_by_id(template.id)
        loaded.name = "Changed"
        await session.flush()

        reloaded = await repository.get_by_id(template.id)
        assert reloaded.name == "Daily"

    async def test_list_results_are_not_tracked(self, repository, session):
        await _seed(repository, _template("Daily"))

        (loaded,) = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 10)
        loaded.usage_count = 99
        await session.flush()

        (reloaded,) = await repository.get_most_used(OWNER_ID, OwnerType.USER, None, 5)
        assert reloaded.usage_count == 0

    async def test_owner_type_is_part_of_the_owner(self, repository):
        await _seed(
            repository,
            _template("Mine"),
            _template("Group one", owner_type=OwnerType.GROUP),
            _template("Someone else", owner_id=generate_uuid()),
        )

        results = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 10)

        assert [t.name for t in results] == ["Mine"]

    async def test_template_type_filter_only_when_given(self, repository):
        await _seed(
            repository,
            _template("A", template_type="checklist"),
            _template("B", template_type="message"),
        )

        filtered = await repository.get_by_owner(OWNER_ID, OwnerType.USER, "message", TemplateSortBy.NAME, 1, 10)
        unfiltered = await repository.get_by_owner(OWNER_ID, OwnerType.USER, "", TemplateSortBy.NAME, 1, 10)

        assert [t.name for t in filtered] == ["B"]
        assert [t.name for t in unfiltered] == ["A", "B"]


class TestSorting:
    """Tests for sort orders and tie-breaks."""

    async def test_usage_count_descending(self, repository):
        await _seed(repository, _template("five", 5), _template("one", 1), _template("three", 3))

        results = await repository.get_by_owner(
            OWNER_ID, OwnerType.USER, None, TemplateSortBy.USAGE_COUNT, 1, 10
        )

        assert [t.usage_count for t in results] == [5, 3, 1]

    async def test_name_ascending_regardless_of_usage(self, repository):
        await _seed(repository, _template("b", 1), _template("c", 9), _template("a", 3))

        results = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 10)

        assert [t.name for t in results] == ["a", "b", "c"]

    async def test_created_at_descending(self, repository):
        await _seed(repository, _template("old", minutes=0), _template("new", minutes=10), _template("mid", minutes=5))

        results = await repository.get_by_owner(
            OWNER_ID, OwnerType.USER, None, TemplateSortBy.CREATED_AT, 1, 10
        )

        assert [t.name for t in results] == ["new", "mid", "old"]

    async def test_updated_at_places_never_updated_last(self, repository):
        await _seed(
            repository,
            _template("untouched-old", minutes=0),
            _template("edited-early", minutes=1, updated_at=BASE_TIME + timedelta(hours=1)),
            _template("untouched-new", minutes=2),
            _template("edited-late", minutes=3, updated_at=BASE_TIME + timedelta(hours=2)),
        )

        results = await repository.get_by_owner(
            OWNER_ID, OwnerType.USER, None, TemplateSortBy.UPDATED_AT, 1, 10
        )

        assert [t.name for t in results] == ["edited-late", "edited-early", "untouched-new", "untouched-old"]

    async def test_equal_usage_breaks_ties_by_newest(self, repository):
        await _seed(repository, _template("first", 2, minutes=0), _template("second", 2, minutes=1))

        results = await repository.get_by_owner(
            OWNER_ID, OwnerType.USER, None, TemplateSortBy.USAGE_COUNT, 1, 10
        )

        assert [t.name for t in results] == ["second", "first"]


class TestPagination:
    """Tests for page/page size translation."""

    async def test_pages_are_one_indexed(self, repository):
        await _seed(repository, *[_template(f"t{i:02d}") for i in range(10)])

        first = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 3)
        second = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 2, 3)
        last = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 4, 3)

        assert [t.name for t in first] == ["t00", "t01", "t02"]
        assert [t.name for t in second] == ["t03", "t04", "t05"]
        assert [t.name for t in last] == ["t09"]

    async def test_most_used_caps_at_limit(self, repository):
        await _seed(repository, *[_template(f"t{i}", usage_count=i) for i in range(6)])

        results = await repository.get_most_used(OWNER_ID, OwnerType.USER, "checklist", 3)

        assert [t.usage_count for t in results] == [5, 4, 3]


class TestWrites:
    """Tests for add, update, delete and usage counting."""

    async def test_add_stores_owner_type_name_and_compressed_body(self, repository, session):
        (template,) = await _seed(repository, _template("Daily", body='{"steps": [1]}'))

        row = (
            await session.execute(
                text("SELECT owner_type, body FROM templates WHERE id = :id"), {"id": template.id}
            )
        ).one()

        assert row.owner_type == "User"
        assert gzip.decompress(row.body).decode("utf-8") == '{"steps": [1]}'

    async def test_update_replaces_mutable_fields(self, repository):
        (template,) = await _seed(repository, _template("Daily", usage_count=4))
        detached = await repository.get_by_id(template.id)
        detached.name = "Nightly"
        detached.description = "after hours"
        detached.body = '{"steps": []}'
        detached.updated_at = BASE_TIME + timedelta(days=1)

        await repository.update(detached)
        reloaded = await repository.get_by_id(template.id)

        assert reloaded.name == "Nightly"
        assert reloaded.description == "after hours"
        assert reloaded.body == '{"steps": []}'
        assert reloaded.updated_at is not None
        assert reloaded.usage_count == 4

    async def test_update_missing_row_raises(self, repository):
        with pytest.raises(TemplateNotFoundError):
            await repository.update(_template("Ghost"))

    async def test_delete_reports_whether_a_row_was_removed(self, repository):
        (template,) = await _seed(repository, _template("Daily"))

        assert await repository.delete(template.id) is True
        assert await repository.delete(template.id) is False
        assert await repository.delete(generate_uuid()) is False
        assert await repository.get_by_id(template.id) is None

    async def test_increment_usage(self, repository):
        (template,) = await _seed(repository, _template("Daily", usage_count=2))

        assert await repository.increment_usage(template.id) == 3
        assert await repository.increment_usage(template.id) == 4
        assert (await repository.get_by_id(template.id)).usage_count == 4

    async def test_increment_usage_missing_raises(self, repository, session):
        await _seed(repository, _template("Daily"))
        missing = generate_uuid()

        with pytest.raises(TemplateNotFoundError) as excinfo:
            await repository.increment_usage(missing)

        assert excinfo.value.template_id == missing
        total = (await session.execute(select(func.sum(Template.usage_count)))).scalar()
        assert total == 0

    async def test_exists_matches_full_key(self, repository):
        await _seed(repository, _template("Daily"))

        assert await repository.exists(OWNER_ID, OwnerType.USER, "checklist", "Daily") is True
        assert await repository.exists(OWNER_ID, OwnerType.GROUP, "checklist", "Daily") is False
        assert await repository.exists(OWNER_ID, OwnerType.USER, "message", "Daily") is False
        assert await repository.exists(OWNER_ID, OwnerType.USER, "checklist", "daily") is False

    async def test_duplicate_key_is_a_unique_violation(self, repository):
        await _seed(repository, _template("Daily"))

        with pytest.raises(IntegrityError) as excinfo:
            await repository.add(_template("Daily"))

        assert is_unique_violation(excinfo.value) is True

    async def test_missing_column_is_not_a_unique_violation(self, repository):
        with pytest.raises(IntegrityError) as excinfo:
            await repository.add(_template("Daily", owner_id=None))

        assert is_unique_violation(excinfo.value) is False

    async def test_update_onto_taken_name_rolls_back_and_raises(self, repository, session):
        await _seed(repository, _template("A"), _template("B"))
        await session.commit()
        (_, second) = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 10)
        second.name = "A"

        with pytest.raises(IntegrityError) as excinfo:
            await repository.update(second)

        assert is_unique_violation(excinfo.value) is True
        names = await repository.get_by_owner(OWNER_ID, OwnerType.USER, None, TemplateSortBy.NAME, 1, 10)
        assert [t.name for t in names] == ["A", "B"]
