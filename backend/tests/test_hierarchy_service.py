"""
Tests for AreaService / HierarchyService - areas scoped to a locality.

Tests cover:
- Scoped uniqueness (per locality, case-insensitive, active or not)
- Parent existence checks
- Parent never changes on update
- Both sides of the locality/area association stay consistent
- Cascade purge of a locality
"""

import pytest

from rest_api.models import Area
from rest_api.services.crud.hierarchy import LOCALITY_AREAS, attach_child, detach_child
from rest_api.services.domain import AreaService, LocalityService
from shared.utils.exceptions import (
    DuplicateInScopeError,
    NotFoundError,
    ParentNotFoundError,
    ValidationError,
)


class TestCreateChild:

    def test_creates_area_linked_on_both_sides(self, area_service, seed_locality):
        area = area_service.create_child(seed_locality.id, {"name": "Almacen"})

        assert area.id is not None
        assert area.locality_id == seed_locality.id
        assert area.locality is seed_locality
        assert area in seed_locality.areas
        assert area.is_active is True

    def test_same_name_in_two_localities(self, area_service, seed_locality, seed_other_locality):
        first = area_service.create_child(seed_locality.id, {"name": "Almacen"})
        second = area_service.create_child(seed_other_locality.id, {"name": "Almacen"})

        assert first.id != second.id
        assert first.locality_id != second.locality_id

    def test_same_name_twice_in_one_locality(self, area_service, seed_locality):
        area_service.create_child(seed_locality.id, {"name": "Almacen"})

        with pytest.raises(DuplicateInScopeError) as exc_info:
            area_service.create_child(seed_locality.id, {"name": "almacen"})

        assert exc_info.value.parent_id == seed_locality.id
        assert area_service.count_by_parent(seed_locality.id) == 1

    def test_inactive_sibling_still_blocks_the_name(self, area_service, seed_area):
        area_service.deactivate(seed_area.id)

        with pytest.raises(DuplicateInScopeError):
            area_service.create_child(seed_area.locality_id, {"name": "ALMACEN"})

    def test_unknown_parent_fails(self, area_service):
        with pytest.raises(ParentNotFoundError):
            area_service.create_child(999, {"name": "Almacen"})

    def test_generic_create_requires_parent_key(self, area_service):
        with pytest.raises(ValidationError):
            area_service.create({"name": "Almacen"})

    def test_generic_create_routes_to_parent(self, area_service, seed_locality):
        area = area_service.create({"name": "Almacen", "locality_id": seed_locality.id})
        assert area.locality_id == seed_locality.id

    def test_missing_name_fails(self, area_service, seed_locality):
        with pytest.raises(ValidationError):
            area_service.create_child(seed_locality.id, {"is_active": True})


class TestUpdateChild:

    def test_rename(self, area_service, seed_area):
        updated = area_service.update_child(seed_area.id, {"name": "Bodega"})
        assert updated.name == "Bodega"
        assert updated.name_key == "bodega"

    def test_parent_change_is_ignored(self, area_service, seed_area, seed_other_locality):
        original_parent = seed_area.locality_id

        updated = area_service.update_child(
            seed_area.id, {"name": "Almacen", "locality_id": seed_other_locality.id}
        )

        assert updated.locality_id == original_parent
        assert updated in updated.locality.areas
        assert area_service.count_by_parent(seed_other_locality.id) == 0

    def test_rename_onto_sibling_fails(self, area_service, seed_area):
        other = area_service.create_child(seed_area.locality_id, {"name": "Produccion"})

        with pytest.raises(DuplicateInScopeError):
            area_service.update_child(other.id, {"name": "ALMACEN"})

    def test_case_only_rename_of_itself(self, area_service, seed_area):
        updated = area_service.update_child(seed_area.id, {"name": "ALMACEN"})
        assert updated.name == "ALMACEN"

    def test_unknown_child_fails(self, area_service):
        with pytest.raises(NotFoundError):
            area_service.update_child(404, {"name": "Bodega"})

    def test_generic_update_routes_to_update_child(self, area_service, seed_area, seed_other_locality):
        updated = area_service.update(
            seed_area.id, {"name": "Bodega", "locality_id": seed_other_locality.id}
        )
        assert updated.locality_id == seed_area.locality_id


class TestDeleteParent:

    def test_removes_parent_and_children(self, db_session, area_service, seed_locality):
        ids = [
            area_service.create_child(seed_locality.id, {"name": name}).id
            for name in ("Almacen", "Produccion", "Embarques")
        ]

        removed = area_service.delete_parent(seed_locality.id)

        assert removed == 3
        for area_id in ids:
            with pytest.raises(NotFoundError):
                area_service.get_by_id(area_id)
        assert LocalityService(db_session).find(seed_locality.id) is None

    def test_other_localities_untouched(self, area_service, seed_locality, seed_other_locality):
        area_service.create_child(seed_locality.id, {"name": "Almacen"})
        kept = area_service.create_child(seed_other_locality.id, {"name": "Almacen"})

        area_service.delete_parent(seed_locality.id)

        assert area_service.get_by_id(kept.id).locality_id == seed_other_locality.id

    def test_parent_without_children(self, area_service, seed_locality):
        assert area_service.delete_parent(seed_locality.id) == 0

    def test_unknown_parent_fails(self, area_service):
        with pytest.raises(NotFoundError):
            area_service.delete_parent(999)

    def test_name_is_free_after_purge(self, area_service, locality_service, seed_area):
        area_service.delete_parent(seed_area.locality_id)

        again = locality_service.create({"name": "CDMX", "areas": [{"name": "Almacen"}]})
        assert [a.name for a in again.areas] == ["Almacen"]


class TestParentQueries:

    def test_list_by_parent(self, area_service, seed_locality, seed_other_locality):
        area_service.create_child(seed_locality.id, {"name": "Almacen"})
        area_service.create_child(seed_locality.id, {"name": "Produccion"})
        area_service.create_child(seed_other_locality.id, {"name": "Almacen"})

        names = [a.name for a in area_service.list_by_parent(seed_locality.id)]
        assert names == ["Almacen", "Produccion"]

    def test_list_by_unknown_parent_fails(self, area_service):
        with pytest.raises(ParentNotFoundError):
            area_service.list_by_parent(999)

    def test_count_by_unknown_parent_is_zero(self, area_service):
        assert area_service.count_by_parent(999) == 0

    def test_deactivating_parent_keeps_children_active(
        self, area_service, locality_service, seed_area
    ):
        locality_service.deactivate(seed_area.locality_id)
        assert area_service.get_by_id(seed_area.id).is_active is True


class TestAssociationHelpers:
    """attach/detach keep both sides in agreement and are idempotent."""

    def test_attach_is_idempotent(self, seed_locality):
        area = Area(name="Almacen")

        attach_child(seed_locality, area, LOCALITY_AREAS)
        attach_child(seed_locality, area, LOCALITY_AREAS)

        assert seed_locality.areas.count(area) == 1
        assert area.locality is seed_locality

    def test_detach_clears_both_sides(self, seed_locality):
        area = Area(name="Almacen")
        attach_child(seed_locality, area, LOCALITY_AREAS)

        detach_child(seed_locality, area, LOCALITY_AREAS)
        detach_child(seed_locality, area, LOCALITY_AREAS)

        assert area not in seed_locality.areas
        assert area.locality is None


class TestScenario:
    """CDMX / Almacen / almacen / Guadalajara."""

    def test_scoped_names_end_to_end(self, db_session):
        localities = LocalityService(db_session)
        areas = AreaService(db_session)

        cdmx = localities.create({"name": "CDMX"})
        almacen = areas.create_child(cdmx.id, {"name": "Almacen"})

        with pytest.raises(DuplicateInScopeError):
            areas.create_child(cdmx.id, {"name": "almacen"})

        guadalajara = localities.create({"name": "Guadalajara"})
        other = areas.create_child(guadalajara.id, {"name": "Almacen"})

        assert almacen.locality_id == cdmx.id
        assert other.locality_id == guadalajara.id
        assert areas.count_by_parent(cdmx.id) == 1
        assert areas.count_by_parent(guadalajara.id) == 1
        assert [a.name for a in areas.search_by_name("almac")] == ["Almacen", "Almacen"]
