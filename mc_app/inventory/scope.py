"""Resolve the VMs covered by a tree-node selection."""

from __future__ import annotations

from typing import Iterable, Sequence

from mc_app.inventory.models import VMwareTree, VMwareTreeKind, VMwareVM


def get_scope_vm_links(selected_tree_nodes: Iterable[VMwareTree]) -> set[str]:
    """Self links of every VM node inside the selected subtrees."""
    links: set[str] = set()
    for root in selected_tree_nodes:
        for node in root.walk():
            if node.kind == VMwareTreeKind.VM and node.self_link:
                links.add(node.self_link)
    return links


def get_available_vms(
    selected_tree_nodes: Iterable[VMwareTree], vms: Sequence[VMwareVM]
) -> list[VMwareVM]:
    """Return the VMs (in list order) that fall inside the selected scope."""
    links = get_scope_vm_links(selected_tree_nodes)
    return [vm for vm in vms if vm.self_link in links]
