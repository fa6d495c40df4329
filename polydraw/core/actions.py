"""Reversible store mutations recorded in the undo/redo history.

The three action types form a closed set. Each knows how to apply itself to
a store and how to revert itself; ``apply`` and ``revert`` are inverses, and
applying twice leaves the store as applying once.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from polydraw.core.features import Feature


class ActionType(Enum):
    """Kind of store mutation."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class StoreLike(Protocol):
    """Subset of the feature store that actions operate on."""

    def add(self, feature: Feature) -> Feature: ...

    def update(self, feature_id: str, feature: Feature) -> None: ...

    def remove(self, feature_id: str) -> Feature | None: ...

    def get_by_id(self, feature_id: str) -> Feature | None: ...


@dataclass(frozen=True)
class CreateAction:
    """Creation of a new feature."""

    feature: Feature
    type: ActionType = ActionType.CREATE

    def apply(self, store: StoreLike) -> None:
        store.add(self.feature)

    def revert(self, store: StoreLike) -> None:
        store.remove(self.feature.id)


@dataclass(frozen=True)
class UpdateAction:
    """Replacement of a feature's geometry/properties by a new snapshot."""

    feature_id: str
    old_feature: Feature
    new_feature: Feature
    type: ActionType = ActionType.UPDATE

    def apply(self, store: StoreLike) -> None:
        store.update(self.feature_id, self.new_feature)

    def revert(self, store: StoreLike) -> None:
        store.update(self.feature_id, self.old_feature)


@dataclass(frozen=True)
class DeleteAction:
    """Removal of a feature."""

    feature: Feature
    type: ActionType = ActionType.DELETE

    def apply(self, store: StoreLike) -> None:
        store.remove(self.feature.id)

    def revert(self, store: StoreLike) -> None:
        store.add(self.feature)


Action = Union[CreateAction, UpdateAction, DeleteAction]
