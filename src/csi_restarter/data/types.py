# noqa: A005
"""CSI Restarter types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class DeletionOutcome(StrEnum):
    """Result of a single pod delete request."""

    # API returned the pod object
    DELETED = "deleted"
    # API returned a non-failure Status, pod is terminating
    TERMINATING = "terminating"
    # API returned a Status with a failure, deletion was not confirmed
    NOT_CONFIRMED = "not_confirmed"


@dataclass(frozen=True)
class ObjectPath:
    """Namespaced object reference."""

    namespace: str
    name: str

    def __str__(self) -> str:
        """Render as `namespace/name`."""

        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class PVCRecord:
    """PersistentVolumeClaim snapshot used for a single pass."""

    namespace: str
    name: str
    storage_class_name: str | None = None

    @property
    def path(self) -> str:
        """Join key used to match pod volume claims."""

        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class PodRecord:
    """
    Pod snapshot used for a single pass.

    `claim_names` has one entry per pod volume, `None` for volumes that are not
    backed by a PVC.
    """

    namespace: str
    name: str
    phase: str | None = "Running"
    owner_references: tuple[str, ...] = ()
    claim_names: tuple[str | None, ...] = ()

    @property
    def path(self) -> ObjectPath:
        """Get object path for pod."""

        return ObjectPath(namespace=self.namespace, name=self.name)


@dataclass
class PassSummary:
    """Summary of a deletion pass."""

    storage_classes: list[str]
    dry_run: bool
    matched_pvcs: int = 0
    selected_pods: list[ObjectPath] = field(default_factory=list)
    outcomes: dict[ObjectPath, DeletionOutcome] = field(default_factory=dict)

    @property
    def deleted(self) -> list[ObjectPath]:
        """Pods that were deleted or are terminating."""

        return [
            p for p, o in self.outcomes.items() if o != DeletionOutcome.NOT_CONFIRMED
        ]

    @property
    def not_confirmed(self) -> list[ObjectPath]:
        """Pods the API returned a failure status for."""

        return [
            p for p, o in self.outcomes.items() if o == DeletionOutcome.NOT_CONFIRMED
        ]
