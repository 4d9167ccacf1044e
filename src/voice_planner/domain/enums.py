from __future__ import annotations

from enum import Enum


class DocumentKind(str, Enum):
    TO_DO_LIST = "to_do_list"
    PLANNER = "planner"


class CallKind(str, Enum):
    MORNING = "morning"
    EVENING = "evening"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Call"

    @property
    def profile_field(self) -> str:
        return f"{self.value}CallTime"
