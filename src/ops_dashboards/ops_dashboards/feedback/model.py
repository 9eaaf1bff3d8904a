from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_int
from ..core.enums import FilterOp
from ..core.exceptions import ValidationError
from ..filters.model import Condition, Predicate

RATING_FIELDS = ("overall_rating", "cleanliness_rating", "punctuality_rating", "communication_rating")


@dataclass(frozen=True)
class WeeklyFeedback:
    feedback_id: int
    store_id: Optional[int]
    store_name: Optional[str]
    week_start_date: Optional[date]
    week_end_date: Optional[date]
    store_manager_name: Optional[str] = None
    overall_rating: Optional[int] = None
    cleanliness_rating: Optional[int] = None
    punctuality_rating: Optional[int] = None
    communication_rating: Optional[int] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["id"] = data.pop("feedback_id")
        data["reference"] = f"WF-{self.feedback_id}"
        return data


@dataclass(frozen=True)
class FeedbackCriteria:
    store_id: Optional[int] = None
    week_start: Optional[date] = None
    rating: Optional[int] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "FeedbackCriteria":
        try:
            week = parse_optional_date(args.get("week"))
        except ValueError:
            raise ValidationError("week must be a YYYY-MM-DD date")
        return cls(
            store_id=optional_int(args.get("store"), "store"),
            week_start=week,
            rating=optional_int(args.get("rating"), "rating"),
        )

    def to_predicate(self) -> Predicate:
        conditions = []
        if self.store_id is not None:
            conditions.append(Condition("store_id", FilterOp.EQUALS, self.store_id))
        if self.week_start is not None:
            conditions.append(Condition("week_start_date", FilterOp.EQUALS, self.week_start))
        if self.rating is not None:
            conditions.append(Condition("overall_rating", FilterOp.EQUALS, self.rating))
        return tuple(conditions)
