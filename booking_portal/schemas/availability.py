# booking_portal/schemas/availability.py
from datetime import date
from typing import Dict, List, Literal

from pydantic import BaseModel, Field, model_validator


DayCode = Literal["MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"]

# Index matches date.weekday(): 0=MON ... 6=SUN
DAY_CODES: List[str] = ["MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"]
WEEKDAY_CODES = DAY_CODES[:5]


class DaySetting(BaseModel):
    enabled: bool = False
    blocked: bool = False
    start_hour: int = Field(default=9, ge=0, le=23)
    end_hour: int = Field(default=17, ge=0, le=23)

    @property
    def is_available(self) -> bool:
        return self.enabled and not self.blocked


class AvailabilityPolicy(BaseModel):
    """
    Recurring per-weekday availability, edited by an administrator.

    `start_hour < end_hour` is only required for available days and is
    checked by `bounds_errors()` when a policy is saved, so that a policy
    being edited can pass through intermediate states.
    """

    slot_duration_minutes: int = Field(default=30, gt=0)
    daily: Dict[DayCode, DaySetting]

    @model_validator(mode="after")
    def check_all_weekdays_present(self) -> "AvailabilityPolicy":
        missing = [code for code in DAY_CODES if code not in self.daily]
        if missing:
            raise ValueError(f"daily is missing settings for: {', '.join(missing)}")
        return self

    def setting_for(self, day: date) -> DaySetting:
        return self.daily[DAY_CODES[day.weekday()]]

    def bounds_errors(self) -> List[str]:
        errors: List[str] = []
        for code in DAY_CODES:
            setting = self.daily[code]
            if setting.is_available and setting.start_hour >= setting.end_hour:
                errors.append(f"{code}: start_hour must be before end_hour")
        return errors


def default_policy(slot_duration_minutes: int = 30) -> AvailabilityPolicy:
    """Weekdays 09:00-17:00, weekends off."""
    return AvailabilityPolicy(
        slot_duration_minutes=slot_duration_minutes,
        daily={
            code: DaySetting(
                enabled=code in WEEKDAY_CODES,
                blocked=False,
                start_hour=9,
                end_hour=17,
            )
            for code in DAY_CODES
        },
    )
