"""
Tests for the repository layer and store error translation.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError

from rest_api.models import Area, Locality, ProductType
from rest_api.services.crud.repository import (
    ActiveSpec,
    BaseRepository,
    EqualsSpec,
    NameContainsSpec,
    RangeSpec,
    ScopedRepository,
    store_errors,
)
from rest_api.services.domain import LocalityService
from shared.utils.exceptions import StoreUnavailableError


def _operational_error():
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestStoreErrors:

    def test_connectivity_failure_becomes_store_unavailable(self):
        session = MagicMock()

        with pytest.raises(StoreUnavailableError) as exc_info:
            with store_errors(session, "find_all"):
                raise _operational_error()

        assert exc_info.value.operation == "find_all"
        session.rollback.assert_called_once()

    def test_integrity_error_passes_through(self):
        session = MagicMock()
        integrity = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with pytest.raises(IntegrityError):
            with store_errors(session, "save"):
                raise integrity

        session.rollback.assert_not_called()

    def test_reads_never_return_empty_on_failure(self):
        session = MagicMock()
        session.scalars.side_effect = _operational_error()
        service = LocalityService(session)

        with pytest.raises(StoreUnavailableError):
            service.list_all()

    def test_lookup_failure_is_not_reported_as_missing(self):
        session = MagicMock()
        session.scalar.side_effect = _operational_error()

        with pytest.raises(StoreUnavailableError):
            BaseRepository(Locality, session).find_by_id(1)


class TestRelationLoadFailures:
    """A connection lost while loading areas must still surface as StoreUnavailableError."""

    @pytest.fixture
    def area_queries_fail(self, db_session):
        bind = db_session.get_bind()

        def fail_area_selects(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().startswith("SELECT area."):
                raise OperationalError(statement, parameters, Exception("connection lost"))

        event.listen(bind, "before_cursor_execute", fail_area_selects)
        yield
        event.remove(bind, "before_cursor_execute", fail_area_selects)

    def test_load_relations(self, db_session, seed_locality, area_queries_fail):
        db_session.expire(seed_locality, ["areas"])

        with pytest.raises(StoreUnavailableError) as exc_info:
            BaseRepository(Locality, db_session).load_relations(seed_locality, "areas")

        assert exc_info.value.operation == "load_relations"

    def test_create_child(self, db_session, area_service, seed_locality, area_queries_fail):
        db_session.expire(seed_locality, ["areas"])

        with pytest.raises(StoreUnavailableError):
            area_service.create_child(seed_locality.id, {"name": "Almacen"})

    def test_delete_parent(self, db_session, area_service, seed_area, area_queries_fail):
        locality = seed_area.locality
        db_session.expire(locality, ["areas"])

        with pytest.raises(StoreUnavailableError):
            area_service.delete_parent(locality.id)

    def test_locality_detail_endpoint(self, client, db_session, seed_area, area_queries_fail):
        db_session.expire(seed_area.locality, ["areas"])

        response = client.get(f"/api/localities/{seed_area.locality_id}")

        assert response.status_code == 503
        assert response.json()["error"] == "store_unavailable"

    def test_area_reads_load_locality(self, db_session, seed_area):
        db_session.expire(seed_area, ["locality"])

        area = ScopedRepository(
            Area, db_session, parent_key="locality_id", relations=("locality",)
        ).find_by_id(seed_area.id)

        assert "locality" in area.__dict__
        assert area.locality_name == "CDMX"


class TestBaseRepository:

    @pytest.fixture
    def repo(self, db_session):
        return BaseRepository(ProductType, db_session)

    def test_save_assigns_id(self, repo):
        entity = repo.save(ProductType(name="Kraft"))
        assert entity.id is not None

    def test_find_by_id_includes_inactive_by_default(self, repo):
        entity = repo.save(ProductType(name="Kraft", is_active=False))

        assert repo.find_by_id(entity.id) is entity
        assert repo.find_by_id(entity.id, include_inactive=False) is None

    def test_count_and_exists(self, repo):
        entity = repo.save(ProductType(name="Kraft"))
        repo.save(ProductType(name="Blanco", is_active=False))

        assert repo.count() == 2
        assert repo.count(include_inactive=False) == 1
        assert repo.exists(entity.id) is True
        assert repo.exists(999) is False

    def test_exists_by_key_normalizes(self, repo):
        entity = repo.save(ProductType(name="Kraft"))

        assert repo.exists_by_key(ProductType.name_key, " KRAFT ") is True
        assert repo.exists_by_key(ProductType.name_key, "kraft", exclude_id=entity.id) is False

    def test_delete(self, repo):
        entity = repo.save(ProductType(name="Kraft"))
        repo.delete(entity)
        assert repo.find_by_id(entity.id) is None

    def test_find_all_window(self, repo):
        for name in ("Kraft", "Blanco", "Reciclado"):
            repo.save(ProductType(name=name))

        page = repo.find_all(limit=1, offset=1)
        assert [e.name for e in page] == ["Blanco"]


class TestSpecifications:

    @pytest.fixture
    def repo(self, db_session):
        repo = BaseRepository(ProductType, db_session)
        repo.save(ProductType(name="Kraft"))
        repo.save(ProductType(name="Kraft Blanco", is_active=False))
        repo.save(ProductType(name="Reciclado"))
        return repo

    def test_active(self, repo):
        names = [e.name for e in repo.find_by_spec(ActiveSpec(ProductType))]
        assert names == ["Kraft", "Reciclado"]

    def test_combined_with_and(self, repo):
        spec = ActiveSpec(ProductType) & NameContainsSpec(ProductType.name_key, "KRAFT")
        assert [e.name for e in repo.find_by_spec(spec)] == ["Kraft"]

    def test_or_and_not(self, repo):
        spec = EqualsSpec(ProductType.name, "Reciclado") | ~ActiveSpec(ProductType)
        assert [e.name for e in repo.find_by_spec(spec)] == ["Kraft Blanco", "Reciclado"]

    def test_count_by_spec(self, repo):
        assert repo.count_by_spec(NameContainsSpec(ProductType.name_key, "kraft")) == 2

    def test_range_with_open_bound(self, seed_references, db_session):
        from rest_api.services.domain import CoilService

        service = CoilService(db_session)
        for code, width in (("B-1", 80.0), ("B-2", 120.0)):
            service.create({**seed_references, "supplier_code": code, "width": width,
                            "grammage": 150.0, "weight": 900.0})

        repo = BaseRepository(service.model, db_session)
        wide = repo.find_by_spec(RangeSpec(service.model.width, minimum=100.0))
        assert [c.supplier_code for c in wide] == ["B-2"]


class TestScopedRepository:

    def test_requires_parent_column(self, db_session):
        with pytest.raises(AttributeError):
            ScopedRepository(Locality, db_session, parent_key="locality_id")

    def test_scope_queries(self, db_session, seed_locality, seed_other_locality):
        repo = ScopedRepository(Area, db_session, parent_key="locality_id")
        repo.save(Area(name="Almacen", locality=seed_locality))
        repo.save(Area(name="Produccion", locality=seed_locality, is_active=False))
        repo.save(Area(name="Almacen", locality=seed_other_locality))

        assert [a.name for a in repo.find_by_parent(seed_locality.id)] == ["Almacen", "Produccion"]
        assert repo.count_by_parent(seed_locality.id) == 2
        assert repo.count_by_parent(seed_locality.id, include_inactive=False) == 1
        assert repo.exists_by_name_in_scope("PRODUCCION", seed_locality.id) is True
        assert repo.exists_by_name_in_scope("Produccion", seed_other_locality.id) is False
