from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ValidationResult:
    """
    Outcome of a form validation: one message per field.

    A later check for the same field replaces the earlier message, so callers
    only ever see the last one recorded.
    """

    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add(self, field_name: str, message: str) -> None:
        self.errors[field_name] = message

    def as_dict(self) -> Dict[str, object]:
        return {"is_valid": self.is_valid, "errors": dict(self.errors)}
