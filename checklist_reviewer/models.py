"""Data models for checklists and the verdicts produced against them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Optional


class VerdictStatus(str, Enum):
    """Outcome of evaluating one checklist item."""

    PASS = "Pass"
    FAIL = "Fail"
    NEEDS_ATTENTION = "NeedsAttention"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChecklistItem:
    """A single review criterion. ``id`` is unique across the whole document."""

    id: str
    description: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ChecklistItem:
        return cls(id=d["id"], description=d.get("description", ""))


@dataclass(frozen=True)
class Category:
    """A named group of checklist items. Priority is carried through, never validated."""

    name: str
    items: tuple[ChecklistItem, ...] = ()
    priority: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Category:
        return cls(
            name=d["name"],
            items=tuple(ChecklistItem.from_dict(i) for i in d["items"]),
            priority=d.get("priority"),
        )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"name": self.name}
        if self.priority is not None:
            d["priority"] = self.priority
        d["items"] = [asdict(i) for i in self.items]
        return d


@dataclass(frozen=True)
class ChecklistDocument:
    """The parsed contents of the checklist file, immutable for one run."""

    version: str
    categories: tuple[Category, ...] = ()

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ChecklistDocument:
        return cls(
            version=str(d.get("version", "")),
            categories=tuple(Category.from_dict(c) for c in d["categories"]),
        )

    def item_ids(self) -> list[str]:
        """All item ids in document order."""
        return [item.id for c in self.categories for item in c.items]

    def has_item(self, item_id: str) -> bool:
        return any(item.id == item_id for c in self.categories for item in c.items)

    def locate(self, item_id: str) -> Optional[Category]:
        """Return the category that owns ``item_id``, or None."""
        for c in self.categories:
            if any(item.id == item_id for item in c.items):
                return c
        return None

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "categories": [c.to_dict() for c in self.categories],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class Verdict:
    """The judgment for one checklist item."""

    id: str
    status: VerdictStatus
    reason: str
    category: Optional[str] = None
    priority: Optional[str] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = str(self.status)
        # Drop None values for cleaner output
        return {k: v for k, v in d.items() if v is not None}


@dataclass
class AuditReport:
    """Result of a heuristic audit over a repository."""

    results: list[Verdict] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return any(v.status == VerdictStatus.FAIL for v in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.has_failures else 0

    def to_dict(self) -> dict:
        return {"results": [v.to_dict() for v in self.results]}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
