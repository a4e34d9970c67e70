"""
Record schemas and the static resource registry.

Each resource type pairs a strict pydantic model (extra keys rejected, no
type coercion) with its set of read-only fields. The registry is built once at
startup; the set of resource types never changes while the process runs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaValidationError

from catalog.domain.naming import pluralize

SERVER_MANAGED_FIELDS = ("id", "createdAt", "updatedAt")


class Game(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: Optional[Union[int, float]] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    title: str
    slug: str
    category: str
    releaseYear: Union[int, float]
    developer: str
    rating: str
    description: str
    price: str
    systemRequirements: Any = None
    imagesExtra: list[str]
    tags: list[str]
    links: Any = None


@dataclass
class ValidationResult:
    valid: bool
    errors: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class ResourceType:
    name: str
    schema: type[BaseModel]
    readonly_fields: frozenset[str] = frozenset()

    @property
    def plural(self) -> str:
        return pluralize(self.name)

    def validate(self, candidate: Any) -> ValidationResult:
        try:
            self.schema.model_validate(candidate)
        except SchemaValidationError as exc:
            errors = [
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ]
            return ValidationResult(False, errors)
        return ValidationResult(True)


class ResourceRegistry(Mapping[str, ResourceType]):
    """Immutable name -> ResourceType lookup."""

    def __init__(self, *types: ResourceType) -> None:
        self._types = {t.name: t for t in types}

    def __getitem__(self, name: str) -> ResourceType:
        return self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def validate(self, type_name: str, candidate: Any) -> ValidationResult:
        return self[type_name].validate(candidate)

    def readonly_fields(self, type_name: str) -> frozenset[str]:
        return self[type_name].readonly_fields


GAME = ResourceType("game", Game)


def default_registry() -> ResourceRegistry:
    return ResourceRegistry(GAME)
