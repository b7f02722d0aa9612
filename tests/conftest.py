"""Shared pytest fixtures and test helpers for summon tests."""

from __future__ import annotations

import logging
import sys
import textwrap
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest
from click.testing import CliRunner

from summon import Tome, circle
from summon.services.telemetry import _current_span, disable_telemetry


@dataclass(frozen=True)
class ConstantAcceleration:
    value: float


@dataclass(frozen=True)
class InitialVelocity:
    value: float


@dataclass(frozen=True)
class InitialPosition:
    value: float


@dataclass(frozen=True)
class Time:
    value: float


@dataclass(frozen=True)
class Distance:
    value: float


class RealPhysicsOn:
    pass


@circle
def kinematics(
    _: RealPhysicsOn,
    a: ConstantAcceleration,
    v: InitialVelocity,
    p: InitialPosition,
    t: Time,
) -> Distance:
    return Distance(0.5 * a.value * t.value**2 + v.value * t.value + p.value)


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep env vars, logging handlers, and telemetry from leaking between tests."""
    for var in ("SUMMON_CONFIG", "SUMMON_SPELLBOOKS", "SUMMON_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    summon_level = logging.getLogger("summon").level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    logging.getLogger("summon").setLevel(summon_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def tome() -> Tome:
    """Empty tome with default settings."""
    return Tome()


@pytest.fixture
def physics_tome() -> Tome:
    """The constant-acceleration example: a=3, v=5, p=6, t=4."""
    t = Tome()
    t.register_fact(ConstantAcceleration(3.0))
    t.register_fact(InitialVelocity(5.0))
    t.register_fact(InitialPosition(6.0))
    t.register_fact(Time(4.0))
    t.register_fact(RealPhysicsOn())
    t.register(kinematics)
    return t


SPELLBOOK_SOURCE = textwrap.dedent(
    """\
    from dataclasses import dataclass

    from summon import circle, fusion


    @dataclass(frozen=True)
    class Speed:
        value: float


    @dataclass(frozen=True)
    class Duration:
        value: float


    @dataclass(frozen=True)
    class Distance:
        value: float


    class Egg:
        pass


    class Chicken:
        pass


    class Feather:
        pass


    class Unobtainium:
        pass


    class Gadget:
        pass


    @circle
    def travelled(s: Speed, d: Duration) -> Distance:
        return Distance(s.value * d.value)


    def inscribe(tome):
        tome.register_fact(Speed(3.0))
        tome.register_fact(Duration(4.0))
        tome.register(travelled)


    def paradox(tome):
        tome.register(fusion(Egg, product=Chicken))
        tome.register(fusion(Chicken, product=Egg))
        tome.register(fusion(Chicken, product=Feather))


    def broken(tome):
        tome.register(fusion(Unobtainium, product=Gadget))


    not_callable = 42
    """
)


@pytest.fixture
def spellbook_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Directory holding an importable ``travel_book`` spellbook, used as CWD."""
    (tmp_path / "travel_book.py").write_text(SPELLBOOK_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    sys.modules.pop("travel_book", None)
