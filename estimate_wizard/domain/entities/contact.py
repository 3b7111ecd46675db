from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormContact:
    name: str
    email: str
    zip: str
    phone: str

    def as_fields(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "phone": self.phone, "zip": self.zip}
