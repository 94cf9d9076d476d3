from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Member:
    """Domain entity: a club member.

    Note: plain data object; `extra` keeps stored keys this version does not know about.
    """

    member_id: str
    name: str
    email: str = ""
    belay: bool = False
    emergency: str = ""
    pr: str = ""
    notes: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
