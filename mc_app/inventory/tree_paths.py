"""Resolve each VM's location in the host and folder topology trees.

Both trees are indexed in a single depth-first traversal each, mapping a VM
self link to the chain of ancestors leading to it (root first). Path info is
then read off those chains:

* datacenter, cluster and host come from the host tree, nearest ancestor of
  each kind winning;
* folders come from the VM (folder) tree, excluding the root node.

A VM missing from one tree only loses that tree's contribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from mc_app.inventory.models import (
    VMwareTree,
    VMwareTreeKind,
    VMwareTreeObject,
    VMwareVM,
)

DEFAULT_FOLDER_SEPARATOR = "/"

Ancestors = tuple[VMwareTree, ...]


@dataclass(frozen=True)
class TreePathInfo:
    datacenter: VMwareTreeObject | None = None
    cluster: VMwareTreeObject | None = None
    host: VMwareTreeObject | None = None
    folders: tuple[VMwareTreeObject, ...] | None = None
    folder_path_str: str | None = None

    @property
    def datacenter_name(self) -> str:
        return self.datacenter.name if self.datacenter else ""

    @property
    def cluster_name(self) -> str:
        return self.cluster.name if self.cluster else ""

    @property
    def host_name(self) -> str:
        return self.host.name if self.host else ""

    @property
    def folder_path(self) -> str:
        return self.folder_path_str or ""


EMPTY_PATH_INFO = TreePathInfo()


def index_vm_tree_paths(tree: VMwareTree) -> dict[str, Ancestors]:
    """Map every VM self link in ``tree`` to its ancestors, root first."""
    index: dict[str, Ancestors] = {}
    stack: list[tuple[VMwareTree, Ancestors]] = [(tree, ())]
    while stack:
        node, ancestors = stack.pop()
        if node.kind == VMwareTreeKind.VM and node.self_link:
            index.setdefault(node.self_link, ancestors)
        if node.children:
            child_ancestors = ancestors + (node,)
            for child in reversed(node.children):
                stack.append((child, child_ancestors))
    return index


def _nearest(ancestors: Ancestors, kind: VMwareTreeKind) -> VMwareTreeObject | None:
    for node in reversed(ancestors):
        if node.kind == kind and node.object is not None:
            return node.object
    return None


def _folders(ancestors: Ancestors) -> tuple[VMwareTreeObject, ...]:
    return tuple(
        node.object
        for node in ancestors[1:]
        if node.kind == VMwareTreeKind.FOLDER and node.object is not None
    )


def _path_info(
    host_ancestors: Ancestors | None,
    vm_ancestors: Ancestors | None,
    separator: str,
) -> TreePathInfo:
    datacenter = cluster = host = None
    if host_ancestors is not None:
        datacenter = _nearest(host_ancestors, VMwareTreeKind.DATACENTER)
        cluster = _nearest(host_ancestors, VMwareTreeKind.CLUSTER)
        host = _nearest(host_ancestors, VMwareTreeKind.HOST)

    folders = None
    folder_path_str = None
    if vm_ancestors is not None:
        folders = _folders(vm_ancestors)
        folder_path_str = separator.join(folder.name for folder in folders) or None

    return TreePathInfo(
        datacenter=datacenter,
        cluster=cluster,
        host=host,
        folders=folders,
        folder_path_str=folder_path_str,
    )


def get_vm_tree_path_info_by_vm(
    vms: Sequence[VMwareVM],
    host_tree: VMwareTree | None,
    vm_tree: VMwareTree | None,
    *,
    separator: str = DEFAULT_FOLDER_SEPARATOR,
) -> dict[str, TreePathInfo]:
    """Return path info keyed by VM self link.

    While either tree is unavailable every VM gets an empty entry.
    """
    if host_tree is None or vm_tree is None:
        return {vm.self_link: EMPTY_PATH_INFO for vm in vms}

    host_index = index_vm_tree_paths(host_tree)
    vm_index = index_vm_tree_paths(vm_tree)
    return {
        vm.self_link: _path_info(
            host_index.get(vm.self_link),
            vm_index.get(vm.self_link),
            separator,
        )
        for vm in vms
    }
