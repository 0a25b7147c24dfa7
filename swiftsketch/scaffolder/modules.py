"""Module dependency graph for the modular architecture.

The graph is fixed: ``Util`` has no dependencies, ``Core`` and ``UI`` depend on
``Util``, and the app depends on all three.  The only variable is the naming
policy (an optional prefix), which is resolved once here and carried by the
resulting :class:`ModuleNaming` everywhere a module name is emitted.
"""

from __future__ import annotations

from typing import Optional

from .errors import ValidationError
from .models import ModuleNaming, ModuleRole, ModuleSpec

MODULE_DEPENDENCIES: dict[ModuleRole, frozenset[ModuleRole]] = {
    ModuleRole.UTIL: frozenset(),
    ModuleRole.CORE: frozenset({ModuleRole.UTIL}),
    ModuleRole.UI: frozenset({ModuleRole.UTIL}),
    ModuleRole.APP: frozenset({ModuleRole.CORE, ModuleRole.UI, ModuleRole.UTIL}),
}

# Declaration order, used to break ties between independent roles.
_ROLE_ORDER: list[ModuleRole] = [
    ModuleRole.UTIL,
    ModuleRole.CORE,
    ModuleRole.UI,
    ModuleRole.APP,
]


def build_module_graph(
    modular: bool,
    prefix: Optional[str],
    package_name: str,
) -> tuple[ModuleNaming, list[ModuleSpec]]:
    """Compute the naming policy and the ordered module list.

    Args:
        modular: Whether the modular (App + local packages) layout is used.
        prefix: Optional module name prefix.  An empty string means no prefix.
        package_name: Name of the plain package used when *modular* is false.

    Returns:
        ``(naming, modules)`` where *modules* is topologically sorted, leaves
        first.  Non-modular projects get a single app-equivalent module named
        after the package, without dependencies.
    """
    naming = ModuleNaming(prefix=prefix)
    if not modular:
        return naming, [ModuleSpec(role=ModuleRole.APP, resolved_name=package_name)]

    order = topological_order(MODULE_DEPENDENCIES)
    modules = [
        ModuleSpec(
            role=role,
            resolved_name=naming.resolve(role),
            depends_on=MODULE_DEPENDENCIES[role],
        )
        for role in order
    ]
    return naming, modules


def topological_order(
    graph: dict[ModuleRole, frozenset[ModuleRole]],
) -> list[ModuleRole]:
    """Order *graph*'s roles so every role follows all of its dependencies.

    Raises:
        ValidationError: If a dependency is not part of the graph or the graph
            contains a cycle.
    """
    for role, deps in graph.items():
        missing = deps - graph.keys()
        if missing:
            raise ValidationError(
                f"Module '{role.value}' depends on unknown module(s)",
                value=", ".join(sorted(m.value for m in missing)),
                allowed=[r.value for r in graph],
            )

    ordered: list[ModuleRole] = []
    remaining = [r for r in _ROLE_ORDER if r in graph]
    while remaining:
        ready = [r for r in remaining if graph[r] <= set(ordered)]
        if not ready:
            raise ValidationError(
                "Module dependency graph contains a cycle",
                value=", ".join(r.value for r in remaining),
            )
        ordered.extend(ready)
        remaining = [r for r in remaining if r not in ready]
    return ordered
