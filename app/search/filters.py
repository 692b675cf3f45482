"""
Typed filter expressions rendered to MongoDB query documents.

Filters are built as a tree of immutable nodes and rendered once with
``to_mongo()``. Field nodes hold a dotted document path; logical nodes
combine other nodes.
"""

import re
from dataclasses import dataclass
from typing import Any


class Predicate:
    """Base class for filter nodes."""

    def to_mongo(self) -> dict[str, Any]:
        """Render this node as a MongoDB filter document."""
        raise NotImplementedError

    def condition(self) -> dict[str, Any]:
        """Render the operator part used inside an ``$elemMatch``."""
        raise NotImplementedError


@dataclass(frozen=True)
class Equals(Predicate):
    """Field equals value (or, for arrays, contains it)."""

    field: str
    value: Any

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.value}

    def condition(self) -> dict[str, Any]:
        return {"$eq": self.value}


@dataclass(frozen=True)
class NotEquals(Predicate):
    """Field differs from value (for arrays, no element equals it)."""

    field: str
    value: Any

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: {"$ne": self.value}}

    def condition(self) -> dict[str, Any]:
        return {"$ne": self.value}


@dataclass(frozen=True)
class Compare(Predicate):
    """Ordered comparison; ``op`` is one of lt, lte, gt, gte."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in ("lt", "lte", "gt", "gte"):
            raise ValueError(f"Unsupported comparison operator: {self.op}")

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.condition()}

    def condition(self) -> dict[str, Any]:
        return {f"${self.op}": self.value}


@dataclass(frozen=True)
class In(Predicate):
    """Field equals one of the values."""

    field: str
    values: tuple[Any, ...]

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.condition()}

    def condition(self) -> dict[str, Any]:
        return {"$in": list(self.values)}


@dataclass(frozen=True)
class Regex(Predicate):
    """
    Case-insensitive substring match.

    ``text`` is matched literally unless ``raw`` is set, in which case it is
    used as a regular expression.
    """

    field: str
    text: str
    raw: bool = False

    @property
    def pattern(self) -> str:
        return self.text if self.raw else re.escape(self.text)

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.condition()}

    def condition(self) -> dict[str, Any]:
        return {"$regex": self.pattern, "$options": "i"}


@dataclass(frozen=True)
class Exists(Predicate):
    """Field (or array position, e.g. ``items.1``) is present."""

    field: str
    exists: bool = True

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: {"$exists": self.exists}}

    def condition(self) -> dict[str, Any]:
        return {"$exists": self.exists}


@dataclass(frozen=True)
class ElemMatch(Predicate):
    """
    Some element of the array at ``field`` satisfies every clause.

    Clauses with an empty field name apply to the element itself (arrays of
    scalars); others are paths relative to the element.
    """

    field: str
    clauses: tuple[Predicate, ...]

    def to_mongo(self) -> dict[str, Any]:
        match: dict[str, Any] = {}
        for clause in self.clauses:
            if getattr(clause, "field", None) == "":
                match.update(clause.condition())
            else:
                match.update(clause.to_mongo())
        return {self.field: {"$elemMatch": match}}


@dataclass(frozen=True)
class And(Predicate):
    """All clauses must hold."""

    clauses: tuple[Predicate, ...]

    def to_mongo(self) -> dict[str, Any]:
        if len(self.clauses) == 1:
            return self.clauses[0].to_mongo()
        return {"$and": [clause.to_mongo() for clause in self.clauses]}


@dataclass(frozen=True)
class Or(Predicate):
    """At least one clause must hold."""

    clauses: tuple[Predicate, ...]

    def to_mongo(self) -> dict[str, Any]:
        if len(self.clauses) == 1:
            return self.clauses[0].to_mongo()
        return {"$or": [clause.to_mongo() for clause in self.clauses]}


def any_of(*clauses: Predicate) -> Or:
    """Combine clauses disjunctively."""
    return Or(tuple(clauses))
