from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Address:
    """Postal address of a contact."""

    address: str = ""
    address2: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""

    def lines(self) -> list[str]:
        out = [self.address]
        if self.address2:
            out.append(self.address2)
        out.append(f"{self.postal_code} {self.city}".strip())
        if self.country:
            out.append(self.country)
        return out

    def to_string(self) -> str:
        return "\n".join(self.lines())


@dataclass
class Contact:
    """Company or customer identity block."""

    name: str
    logo: bytes | None = None
    address: Address | None = None
    phone: str = ""
    additional_info: List[str] = field(default_factory=list)
