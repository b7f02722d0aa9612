"""End-to-end tests for Tome: register, plan, execute, summon."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from conftest import ConstantAcceleration, Distance, RealPhysicsOn, Time

from summon import Tome, circle, fusion
from summon.config.settings import SummonSettings
from summon.domain.keys import type_key


@dataclass
class Normal:
    value: int


@dataclass
class Double:
    value: int


@dataclass
class Half:
    value: int


class Root:
    pass


class Left:
    pass


class Right:
    pass


class Top:
    pass


class Void:
    pass


class TestSummon:
    def test_physics_example(self, physics_tome: Tome) -> None:
        assert physics_tome.summon(Distance) == Distance(0.5 * 3.0 * 4.0**2 + 5.0 * 4.0 + 6.0)
        assert physics_tome.summon(Distance) == Distance(50.0)

    def test_doubles_and_halves(self, tome: Tome) -> None:
        tome.register_fact(Normal(4))

        @tome.register
        @circle
        def double(n: Normal) -> Double:
            return Double(n.value * 2)

        @tome.register
        @circle
        def half(n: Normal) -> Half:
            return Half(n.value // 2)

        assert tome.summon(Double) == Double(8)
        assert tome.summon(Half) == Half(2)

    def test_fact_shortcut(self, tome: Tome) -> None:
        tome.register_fact(Normal(7))
        tome.register(fusion(Void, product=Normal))
        plan = tome.find_plan(Normal)
        assert plan is not None
        assert len(plan) == 1
        assert tome.summon(Normal) == Normal(7)

    def test_tag_logic(self, tome: Tome) -> None:
        tome.register_fact(Root())
        tome.register(fusion(Root, product=Left))
        assert isinstance(tome.summon(Left), Left)

    def test_unsatisfiable_returns_none(self, tome: Tome) -> None:
        assert tome.summon(Void) is None

    def test_unsatisfiable_returns_default(self, tome: Tome) -> None:
        tome.register(fusion(Void, product=Top))
        assert tome.summon(Top, "nothing") == "nothing"

    def test_summon_by_key(self, physics_tome: Tome) -> None:
        assert physics_tome.summon(type_key(Time)) == Time(4.0)

    def test_summon_never_mutates_registry(self, physics_tome: Tome) -> None:
        revision = physics_tome.registry.revision
        size = len(physics_tome.registry)
        physics_tome.summon(Distance)
        physics_tome.summon(Void)
        assert physics_tome.registry.revision == revision
        assert len(physics_tome.registry) == size

    def test_facts_are_not_shared_between_summons(self, tome: Tome) -> None:
        tome.register_fact([1, 2], list)
        first = tome.summon(list)
        first.append(3)
        assert tome.summon(list) == [1, 2]


class TestDiamond:
    def test_shared_ingredient_produced_once(self, tome: Tome) -> None:
        calls: list[str] = []

        @circle
        def make_root() -> Root:
            calls.append("root")
            return Root()

        @circle
        def make_left(r: Root) -> Left:
            return Left()

        @circle
        def make_right(r: Root) -> Right:
            return Right()

        @circle
        def make_top(left: Left, right: Right) -> Top:
            return Top()

        for rule in (make_top, make_left, make_right, make_root):
            tome.register(rule)

        assert isinstance(tome.summon(Top), Top)
        assert calls == ["root"]


class TestPreserve:
    def test_keeps_every_material(self, physics_tome: Tome) -> None:
        store = physics_tome.preserve(Distance)
        assert store is not None
        assert len(store) == 6
        assert store.extract(ConstantAcceleration) == ConstantAcceleration(3.0)
        assert isinstance(store.extract(RealPhysicsOn), RealPhysicsOn)

    def test_none_when_unsatisfiable(self, tome: Tome) -> None:
        assert tome.preserve(Void) is None

    def test_plan_soundness(self, physics_tome: Tome) -> None:
        plan = physics_tome.find_plan(Distance)
        assert plan is not None
        available: set[object] = set()
        for rule in plan:
            assert set(rule.ingredients()) <= available
            available.add(rule.product())


class TestPlanCache:
    def test_disabled_by_default(self, physics_tome: Tome) -> None:
        assert physics_tome.search(Distance) is not physics_tome.search(Distance)

    def test_cached_until_registry_changes(self) -> None:
        tome = Tome(cache_plans=True)
        tome.register(fusion(Root, product=Left))
        first = tome.search(Left)
        assert first.plan is None
        assert tome.search(Left) is first

        tome.register_fact(Root())
        second = tome.search(Left)
        assert second is not first
        assert second.plan is not None
        assert isinstance(tome.summon(Left), Left)


class TestConfiguration:
    def test_register_returns_rule(self, tome: Tome) -> None:
        rule = fusion(Root, product=Left)
        assert tome.register(rule) is rule

    def test_deep_copy_default_applies_to_facts(self) -> None:
        tome = Tome(deep_copy_facts=True)
        fact = tome.register_fact([[1]], list)
        assert fact.transmute([])[0] is not fact.value[0]  # type: ignore[index]

    def test_explicit_deep_overrides_default(self) -> None:
        tome = Tome(deep_copy_facts=True)
        fact = tome.register_fact([[1]], list, deep=False)
        assert fact.transmute([])[0] is fact.value[0]  # type: ignore[index]

    def test_max_depth(self) -> None:
        tome = Tome(max_depth=0)
        tome.register_fact(Root())
        tome.register(fusion(Root, product=Left))
        assert tome.summon(Left) is None
        assert tome.search(Left).depth_exceeded

    def test_from_settings(self, tmp_path: Path) -> None:
        (tmp_path / "summon.toml").write_text(
            "[search]\nmax_depth = 0\ncache_plans = true\n", encoding="utf-8"
        )
        settings = SummonSettings.from_cli(project_root=tmp_path)
        tome = Tome.from_settings(settings)
        tome.register_fact(Root())
        tome.register(fusion(Root, product=Left))
        assert tome.summon(Left) is None
        assert tome.search(Right) is tome.search(Right)

    @pytest.mark.parametrize("detect", [True, False])
    def test_acyclic_registry_unaffected_by_cycle_detection(self, detect: bool) -> None:
        tome = Tome(detect_cycles=detect)
        tome.register_fact(Root())
        tome.register(fusion(Root, product=Left))
        assert isinstance(tome.summon(Left), Left)
