"""Tests for the module dependency graph and naming policy."""

from __future__ import annotations

import pytest

from swiftsketch.scaffolder.errors import ValidationError
from swiftsketch.scaffolder.models import ModuleNaming, ModuleRole
from swiftsketch.scaffolder.modules import (
    MODULE_DEPENDENCIES,
    build_module_graph,
    topological_order,
)

pytestmark = pytest.mark.unit


class TestModuleNaming:
    def test_no_prefix(self):
        naming = ModuleNaming()
        assert naming.resolve(ModuleRole.CORE) == "Core"
        assert naming.resolve(ModuleRole.UI) == "UI"

    def test_prefix_applied_to_every_role(self):
        naming = ModuleNaming(prefix="ABC")
        assert [naming.resolve(r) for r in ModuleRole] == [
            "ABCUtil",
            "ABCCore",
            "ABCUI",
            "ABCApp",
        ]

    @pytest.mark.parametrize("prefix", ["", "   "])
    def test_empty_prefix_means_none(self, prefix):
        naming = ModuleNaming(prefix=prefix)
        assert naming.prefix is None
        assert naming.resolve(ModuleRole.UTIL) == "Util"


class TestBuildModuleGraph:
    def test_single_layout_has_one_module(self):
        naming, modules = build_module_graph(False, None, "Widgets")
        assert naming.prefix is None
        assert len(modules) == 1
        assert modules[0].role is ModuleRole.APP
        assert modules[0].resolved_name == "Widgets"
        assert modules[0].depends_on == frozenset()

    def test_modular_order_is_leaves_first(self):
        _, modules = build_module_graph(True, None, "Shop")
        assert [m.resolved_name for m in modules] == ["Util", "Core", "UI", "App"]

    def test_every_module_follows_its_dependencies(self):
        _, modules = build_module_graph(True, "XY", "Shop")
        position = {m.role: i for i, m in enumerate(modules)}
        for module in modules:
            for dep in module.depends_on:
                assert position[dep] < position[module.role]

    def test_prefixed_names(self):
        naming, modules = build_module_graph(True, "ABC", "Shop")
        assert naming.prefix == "ABC"
        assert [m.resolved_name for m in modules] == ["ABCUtil", "ABCCore", "ABCUI", "ABCApp"]

    def test_fixed_dependencies(self):
        _, modules = build_module_graph(True, None, "Shop")
        deps = {m.role: m.depends_on for m in modules}
        assert deps[ModuleRole.UTIL] == frozenset()
        assert deps[ModuleRole.CORE] == {ModuleRole.UTIL}
        assert deps[ModuleRole.UI] == {ModuleRole.UTIL}
        assert deps[ModuleRole.APP] == {ModuleRole.UTIL, ModuleRole.CORE, ModuleRole.UI}


class TestTopologicalOrder:
    def test_default_graph(self):
        assert topological_order(MODULE_DEPENDENCIES) == [
            ModuleRole.UTIL,
            ModuleRole.CORE,
            ModuleRole.UI,
            ModuleRole.APP,
        ]

    def test_cycle_rejected(self):
        graph = {
            ModuleRole.UTIL: frozenset({ModuleRole.CORE}),
            ModuleRole.CORE: frozenset({ModuleRole.UTIL}),
        }
        with pytest.raises(ValidationError, match="cycle"):
            topological_order(graph)

    def test_unknown_dependency_rejected(self):
        graph = {ModuleRole.CORE: frozenset({ModuleRole.UTIL})}
        with pytest.raises(ValidationError) as exc_info:
            topological_order(graph)
        assert exc_info.value.value == "util"
        assert exc_info.value.allowed == ("core",)
