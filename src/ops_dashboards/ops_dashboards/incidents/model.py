from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..approvals.model import ApprovalRequest
from ..core.enums import RequestKind


@dataclass(frozen=True)
class TheftIncident:
    incident_id: int
    store: Optional[str]
    incident_date: Optional[date]
    status: Optional[str]
    stolen_items: Optional[str] = None
    stolen_value: Optional[Decimal] = None
    value_collected: Optional[Decimal] = None
    capture_method: Optional[str] = None
    thief_name: Optional[str] = None
    thief_surname: Optional[str] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_by_name: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    photo_count: int = 0
    details: Mapping[str, Any] = field(default_factory=dict)

    def to_request(self) -> ApprovalRequest:
        return ApprovalRequest(
            request_id=self.incident_id,
            kind=RequestKind.THEFT_INCIDENT,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
            review_notes=self.review_notes,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
        )

    def to_dict(self) -> dict:
        data = dict(self.details)
        data.update(
            {
                "id": self.incident_id,
                "reference": f"TI-{self.incident_id}",
                "store": self.store,
                "incident_date": self.incident_date,
                "status": self.status,
                "stolen_items": self.stolen_items,
                "stolen_value": self.stolen_value,
                "value_collected": self.value_collected,
                "capture_method": self.capture_method,
                "thief_name": self.thief_name,
                "thief_surname": self.thief_surname,
                "created_by_name": self.created_by_name,
                "created_at": self.created_at,
                "review_notes": self.review_notes,
                "reviewed_by_name": self.reviewed_by_name,
                "reviewed_at": self.reviewed_at,
                "photo_count": self.photo_count,
            }
        )
        return data


@dataclass(frozen=True)
class IncidentPhoto:
    photo_id: int
    incident_id: int
    file_name: str
    original_name: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.photo_id,
            "file_name": self.file_name,
            "original_name": self.original_name,
            "file_path": self.file_path,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "uploaded_at": self.uploaded_at,
        }
