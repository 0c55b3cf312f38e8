"""
Parent/child association helpers.

These are the only functions that change which parent a child belongs to.
Both sides (the parent's collection and the child's back-reference) are
updated in the same call, so they never disagree in memory.

Usage:
    from rest_api.services.crud.hierarchy import Association, attach_child, detach_child

    LOCALITY_AREAS = Association(collection="areas", back_reference="locality")
    attach_child(locality, area, LOCALITY_AREAS)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Association:
    """
    Names of the two relationship attributes linking a parent and a child.

    Attributes:
        collection: Attribute on the parent holding its children.
        back_reference: Attribute on the child pointing at its parent.
    """

    collection: str
    back_reference: str


def attach_child(parent: Any, child: Any, association: Association) -> None:
    """
    Link ``child`` to ``parent`` on both sides. Idempotent.
    """
    children = getattr(parent, association.collection)
    if child not in children:
        children.append(child)
    if getattr(child, association.back_reference) is not parent:
        setattr(child, association.back_reference, parent)


def detach_child(parent: Any, child: Any, association: Association) -> None:
    """
    Unlink ``child`` from ``parent`` on both sides. Idempotent.

    With a ``delete-orphan`` cascade on the collection, a detached child is
    deleted at the next flush.
    """
    children = getattr(parent, association.collection)
    if child in children:
        children.remove(child)
    if getattr(child, association.back_reference) is parent:
        setattr(child, association.back_reference, None)


LOCALITY_AREAS = Association(collection="areas", back_reference="locality")
