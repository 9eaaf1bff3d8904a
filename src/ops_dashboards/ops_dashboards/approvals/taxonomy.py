from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Type

from ..core.enums import ApprovalStatus, IncidentStatus, RequestKind


@dataclass(frozen=True)
class Taxonomy:
    kind: RequestKind
    status_enum: Type[Enum]
    allowed_targets: Tuple[Enum, ...]
    approver_slots: Tuple[str, ...]
    # Statuses counted as "pending" on the landing card.
    pending_statuses: FrozenSet[str]
    accepts_review_notes: bool = False
    records_actor: bool = False
    records_timestamp: bool = False


TAXONOMIES: Dict[RequestKind, Taxonomy] = {
    RequestKind.EXTRA_CLEANING: Taxonomy(
        kind=RequestKind.EXTRA_CLEANING,
        status_enum=ApprovalStatus,
        allowed_targets=(ApprovalStatus.APPROVED, ApprovalStatus.REJECTED),
        approver_slots=("area_manager", "head_office", "hr"),
        pending_statuses=frozenset({ApprovalStatus.PENDING.value}),
        records_actor=True,
        records_timestamp=True,
    ),
    RequestKind.PRODUCTION_EXTRAS: Taxonomy(
        kind=RequestKind.PRODUCTION_EXTRAS,
        status_enum=ApprovalStatus,
        allowed_targets=(ApprovalStatus.APPROVED, ApprovalStatus.REJECTED),
        approver_slots=("approver1", "approver2"),
        pending_statuses=frozenset({ApprovalStatus.PENDING.value}),
    ),
    RequestKind.THEFT_INCIDENT: Taxonomy(
        kind=RequestKind.THEFT_INCIDENT,
        status_enum=IncidentStatus,
        allowed_targets=(IncidentStatus.REVIEWED, IncidentStatus.PENDING, IncidentStatus.CLOSED),
        approver_slots=(),
        pending_statuses=frozenset({IncidentStatus.OPEN.value, IncidentStatus.PENDING.value}),
        accepts_review_notes=True,
        records_actor=True,
        records_timestamp=True,
    ),
}
