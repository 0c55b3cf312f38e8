"""
Property-based tests with Hypothesis.

Each example runs against its own freshly created schema, so these tests do
not use the function-scoped ``db_session`` fixture.
"""

import string
from contextlib import contextmanager

from hypothesis import given, settings, strategies as st
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.models import Base, normalize_key
from rest_api.services.domain import AreaService, LocalityService
from shared.infrastructure.db import enable_sqlite_foreign_keys
from shared.utils.exceptions import DuplicateInScopeError


engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
PropertySession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def fresh_session():
    Base.metadata.create_all(bind=engine)
    session = PropertySession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


names = st.text(alphabet=string.ascii_letters, min_size=2, max_size=20)
padded_names = st.builds(
    lambda left, name, right: f"{left}{name}{right}",
    st.text(alphabet=" ", max_size=3),
    names,
    st.text(alphabet=" ", max_size=3),
)


class TestNormalizedKeyProperties:

    @given(value=padded_names)
    def test_normalization_is_idempotent(self, value):
        assert normalize_key(normalize_key(value)) == normalize_key(value)

    @given(value=names)
    def test_normalization_ignores_case(self, value):
        assert normalize_key(value.upper()) == normalize_key(value.lower())

    @given(value=padded_names)
    def test_normalization_ignores_surrounding_blanks(self, value):
        assert normalize_key(value) == normalize_key(value.strip())


class TestScopedUniquenessProperties:

    @given(area_names=st.lists(padded_names, min_size=1, max_size=8))
    @settings(max_examples=30, deadline=None)
    def test_one_area_per_normalized_name(self, area_names):
        """Property: a locality ends up with one area per distinct normalized name."""
        with fresh_session() as db:
            locality = LocalityService(db).create({"name": "CDMX"})
            areas = AreaService(db)

            created = 0
            for name in area_names:
                try:
                    areas.create_child(locality.id, {"name": name})
                    created += 1
                except DuplicateInScopeError:
                    pass

            expected = len({normalize_key(n) for n in area_names})
            assert created == expected
            assert areas.count_by_parent(locality.id) == expected

    @given(name=names)
    @settings(max_examples=20, deadline=None)
    def test_same_name_in_every_locality(self, name):
        """Property: scoping means one name fits once into each locality."""
        with fresh_session() as db:
            localities = LocalityService(db)
            areas = AreaService(db)
            first = localities.create({"name": "CDMX"})
            second = localities.create({"name": "Guadalajara"})

            a = areas.create_child(first.id, {"name": name})
            b = areas.create_child(second.id, {"name": name.swapcase()})

            assert a.locality_id == first.id
            assert b.locality_id == second.id


class TestActivationProperties:

    @given(operations=st.lists(st.booleans(), min_size=1, max_size=10))
    @settings(max_examples=30, deadline=None)
    def test_final_state_follows_last_operation(self, operations):
        """Property: activity reflects the last activate/deactivate; nothing else changes."""
        with fresh_session() as db:
            service = LocalityService(db)
            locality = service.create({"name": "CDMX"})

            for activate in operations:
                if activate:
                    service.activate(locality.id)
                else:
                    service.deactivate(locality.id)

            current = service.get_by_id(locality.id)
            assert current.is_active is operations[-1]
            assert current.name == "CDMX"
