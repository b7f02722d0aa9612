"""Tests for PluginManager — registration and the inscribe hook."""

from __future__ import annotations

from summon import Tome, fusion
from summon.domain.keys import type_key
from summon.plugins import PluginManager, hookimpl


class Ore:
    pass


class Ingot:
    pass


class _SmithyPlugin:
    @hookimpl
    def summon_inscribe(self, tome: Tome) -> None:
        tome.register_fact(Ore())
        tome.register(fusion(Ore, product=Ingot))


class _BrokenPlugin:
    @hookimpl
    def summon_inscribe(self, tome: Tome) -> None:
        raise RuntimeError("forge cold")


class _SilentPlugin:
    pass


class TestRegistration:
    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_SmithyPlugin(), name="smithy")
        assert "smithy" in pm.list_plugin_names()

    def test_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_SmithyPlugin())
        assert "_SmithyPlugin" in pm.list_plugin_names()

    def test_discover_without_entry_points(self) -> None:
        pm = PluginManager()
        assert isinstance(pm.discover_and_load(), list)


class TestInscribe:
    def test_plugins_register_rules(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_SmithyPlugin(), name="smithy")
        tome = Tome()
        assert pm.inscribe(tome) == []
        assert len(tome.registry) == 2
        assert isinstance(tome.summon(Ingot), Ingot)

    def test_failure_is_a_warning(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenPlugin(), name="broken")
        pm.register_plugin(_SmithyPlugin(), name="smithy")
        tome = Tome()
        warnings = pm.inscribe(tome)
        assert warnings == ["Plugin broken failed to inscribe rules"]
        assert type_key(Ingot) in tome.registry

    def test_plugins_without_hook_are_ignored(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_SilentPlugin(), name="silent")
        tome = Tome()
        assert pm.inscribe(tome) == []
        assert len(tome.registry) == 0

    def test_class_plugins_are_instantiated(self) -> None:
        pm = PluginManager()
        pm._pm.register(_SmithyPlugin, name="smithy")
        pm._normalize_plugin_instances()
        tome = Tome()
        assert pm.inscribe(tome) == []
        assert type_key(Ingot) in tome.registry
