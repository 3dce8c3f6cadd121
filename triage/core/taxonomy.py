"""
Taxonomy Registry
=================
THE SINGLE SOURCE OF TRUTH for category / priority / status identifiers and
their display metadata.

READ-ONLY CONTRACT:
  - Tables are built once at import time and exposed as MappingProxyType.
  - Lookups NEVER fall back to a default entry.
  - An unknown identifier ALWAYS raises TaxonomyMismatchError.

Callers that render records (see presenter.py) catch TaxonomyMismatchError,
log it, and drop the record instead of crashing the view.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from triage.core.errors import TaxonomyMismatchError


@dataclass(frozen=True)
class TaxonomyEntry:
    """Display metadata for one identifier."""
    id: str
    label: str
    icon: str
    color: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
            "description": self.description,
        }


def _freeze(entries: list[TaxonomyEntry]) -> Mapping[str, TaxonomyEntry]:
    return MappingProxyType({entry.id: entry for entry in entries})


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
CATEGORIES: Mapping[str, TaxonomyEntry] = _freeze([
    TaxonomyEntry("installation", "Installation & Setup", "🚀", "#ff6b6b",
                  "Problems configuring the SDK and tooling"),
    TaxonomyEntry("dependencies", "Dependencies", "📦", "#4ecdc4",
                  "Issues with packages, registries and versions"),
    TaxonomyEntry("ui-widgets", "UI/Widgets", "🎨", "#45b7d1",
                  "Interface, widget and layout errors"),
    TaxonomyEntry("architecture", "Architecture", "🏗️", "#96ceb4",
                  "Problems with BLoC, Provider and state management"),
    TaxonomyEntry("firebase", "Firebase", "🔥", "#ffeaa7",
                  "Firebase, Auth and Firestore integration errors"),
    TaxonomyEntry("platform", "Platform Specific", "📱", "#fd79a8",
                  "Android/iOS issues, permissions and platform configuration"),
    TaxonomyEntry("testing", "Testing", "🧪", "#a29bfe",
                  "Problems with unit, widget and integration tests"),
    TaxonomyEntry("deployment", "Deployment", "🚀", "#fd79a8",
                  "Release errors on Play Store and App Store"),
    TaxonomyEntry("performance", "Performance", "⚡", "#fdcb6e",
                  "Rendering speed, memory and optimisation problems"),
    TaxonomyEntry("others", "Others", "🔧", "#6c5ce7",
                  "Errors that fit no other category"),
])


# ---------------------------------------------------------------------------
# Priorities
# ---------------------------------------------------------------------------
PRIORITIES: Mapping[str, TaxonomyEntry] = _freeze([
    TaxonomyEntry("low", "Low", "🟢", "#10b981", "Minor error, does not block work"),
    TaxonomyEntry("medium", "Medium", "🟡", "#f59e0b", "Slows work down but a workaround exists"),
    TaxonomyEntry("high", "High", "🟠", "#f97316", "Blocks an important feature"),
    TaxonomyEntry("critical", "Critical", "🔴", "#ef4444", "Completely prevents continuing"),
])


# ---------------------------------------------------------------------------
# Statuses
# ---------------------------------------------------------------------------
STATUSES: Mapping[str, TaxonomyEntry] = _freeze([
    TaxonomyEntry("open", "Open", "🔍", "#6b7280"),
    TaxonomyEntry("in-progress", "In Progress", "🔧", "#3b82f6"),
    TaxonomyEntry("solved", "Solved", "✅", "#10b981"),
])


_TABLES: Mapping[str, Mapping[str, TaxonomyEntry]] = MappingProxyType({
    "category": CATEGORIES,
    "priority": PRIORITIES,
    "status": STATUSES,
})


def lookup(kind: str, identifier: str) -> TaxonomyEntry:
    """
    Resolve an identifier of the given kind to its display entry.

    Parameters
    ----------
    kind : str
        One of "category", "priority", "status".
    identifier : str
        The identifier stored on the record.

    Raises
    ------
    TaxonomyMismatchError
        When the identifier is not registered for that kind.
    """
    table = _TABLES.get(kind)
    if table is None:
        raise ValueError(f"Unknown taxonomy kind '{kind}'")
    try:
        return table[identifier]
    except KeyError:
        raise TaxonomyMismatchError(kind, identifier) from None


def lookup_category(identifier: str) -> TaxonomyEntry:
    return lookup("category", identifier)


def lookup_priority(identifier: str) -> TaxonomyEntry:
    return lookup("priority", identifier)


def lookup_status(identifier: str) -> TaxonomyEntry:
    return lookup("status", identifier)


def is_valid(kind: str, identifier: str) -> bool:
    return identifier in _TABLES.get(kind, {})


def ensure_known(category: str, priority: str, status: str) -> None:
    """Raise TaxonomyMismatchError for the first unregistered identifier."""
    lookup_category(category)
    lookup_priority(priority)
    lookup_status(status)


def as_dict() -> dict:
    """Serialisable snapshot of every table, in registry order."""
    return {kind: [e.to_dict() for e in table.values()] for kind, table in _TABLES.items()}
