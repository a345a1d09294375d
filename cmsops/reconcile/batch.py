"""Outcome of a best-effort loop over records."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BatchFailure:
    item_id: str
    label: str
    error: str
    status_code: Any = None


@dataclass
class BatchResult:
    """Collects per-record successes and failures. One failure never stops the loop."""

    operation: str
    succeeded: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    def record_success(self, item_id: str):
        self.succeeded.append(item_id)

    def record_failure(self, item_id: str, label: str, error: Exception):
        self.failed.append(BatchFailure(
            item_id=item_id,
            label=label,
            error=str(error),
            status_code=getattr(error, "status_code", None),
        ))

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def ratio(self) -> str:
        return f"{len(self.succeeded)}/{self.attempted}"

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "attempted": self.attempted,
            "succeeded": list(self.succeeded),
            "failed": [
                {
                    "item_id": f.item_id,
                    "label": f.label,
                    "error": f.error,
                    "status_code": f.status_code,
                }
                for f in self.failed
            ],
        }
