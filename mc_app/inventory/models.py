"""Inventory models for VMware providers (VMs, concerns, topology trees)."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mc_common.errors import InventoryDataError


class _InventoryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class VMConcernCategory(str, Enum):
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFORMATION = "Information"
    ADVISORY = "Advisory"


class VMConcern(_InventoryModel):
    label: str
    category: str
    assessment: str = ""


class InventoryRef(_InventoryModel):
    kind: str = ""
    id: str


class VMwareVM(_InventoryModel):
    """A virtual machine as listed by the inventory service."""

    id: str
    name: str
    self_link: str = Field(alias="selfLink")
    parent: InventoryRef | None = None
    concerns: list[VMConcern] = Field(default_factory=list)

    @field_validator("concerns", mode="before")
    @classmethod
    def _null_concerns(cls, value: Any) -> Any:
        return [] if value is None else value


class VMwareTreeKind(str, Enum):
    ROOT = ""
    DATACENTER = "Datacenter"
    CLUSTER = "Cluster"
    HOST = "Host"
    FOLDER = "Folder"
    VM = "VM"


class VMwareTreeType(str, Enum):
    HOST = "Host"
    VM = "VM"


class VMwareTreeObject(_InventoryModel):
    id: str
    name: str
    self_link: str = Field(alias="selfLink")
    parent: InventoryRef | None = None


class VMwareTree(_InventoryModel):
    """A node of either topology tree; the root node has an empty kind."""

    kind: VMwareTreeKind = VMwareTreeKind.ROOT
    object: VMwareTreeObject | None = None
    children: list["VMwareTree"] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _null_children(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def name(self) -> str:
        return self.object.name if self.object else ""

    @property
    def self_link(self) -> str | None:
        return self.object.self_link if self.object else None

    def walk(self) -> Iterable["VMwareTree"]:
        """Yield this node and every descendant, depth first."""
        stack: list[VMwareTree] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def parse_vms(payload: Iterable[Mapping[str, Any]]) -> list[VMwareVM]:
    """Validate a raw VM list payload."""
    try:
        return [VMwareVM.model_validate(entry) for entry in payload]
    except ValidationError as exc:
        raise InventoryDataError(
            "Invalid VM list payload", context={"errors": exc.error_count()}, cause=exc
        ) from exc


def parse_tree(payload: Mapping[str, Any]) -> VMwareTree:
    """Validate a raw topology tree payload."""
    try:
        return VMwareTree.model_validate(payload)
    except ValidationError as exc:
        raise InventoryDataError(
            "Invalid inventory tree payload",
            context={"errors": exc.error_count()},
            cause=exc,
        ) from exc
