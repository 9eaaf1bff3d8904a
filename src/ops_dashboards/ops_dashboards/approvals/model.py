from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import RequestKind


@dataclass(frozen=True)
class ApprovalRequest:
    """A reviewable record: extra cleaning, production extras, or a theft incident.

    `approver_statuses` maps each approver slot (e.g. "head_office") to its
    own status; `status` is the overall status.
    """

    request_id: int
    kind: RequestKind
    status: Optional[str]
    approver_statuses: Mapping[str, Optional[str]] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None
    review_notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.details)
        data.update(
            {
                "id": self.request_id,
                "kind": self.kind.value,
                "status": self.status,
                "approver_statuses": dict(self.approver_statuses),
                "created_at": self.created_at,
                "updated_at": self.updated_at,
                "updated_by": self.updated_by,
            }
        )
        if self.kind is RequestKind.THEFT_INCIDENT:
            data.update(
                {
                    "review_notes": self.review_notes,
                    "reviewed_by": self.reviewed_by,
                    "reviewed_at": self.reviewed_at,
                }
            )
        return data
