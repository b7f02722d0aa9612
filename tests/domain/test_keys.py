"""Tests for interned type keys."""

import pytest

from summon.domain.keys import TypeKey, key_of, type_key


class Alpha:
    pass


class Beta:
    pass


class AlphaChild(Alpha):
    pass


class TestTypeKey:
    def test_same_class_same_key(self) -> None:
        assert type_key(Alpha) is type_key(Alpha)

    def test_distinct_classes_distinct_keys(self) -> None:
        assert type_key(Alpha) != type_key(Beta)
        assert type_key(Alpha).serial != type_key(Beta).serial

    def test_subclass_has_its_own_key(self) -> None:
        assert type_key(AlphaChild) != type_key(Alpha)

    def test_existing_key_passes_through(self) -> None:
        key = type_key(Alpha)
        assert type_key(key) is key

    @pytest.mark.parametrize("not_a_class", [3, "Alpha", None])
    def test_rejects_non_classes(self, not_a_class: object) -> None:
        with pytest.raises(TypeError, match="classes"):
            type_key(not_a_class)  # type: ignore[arg-type]

    def test_names(self) -> None:
        key = type_key(Alpha)
        assert key.name == f"{__name__}.Alpha"
        assert key.short_name == "Alpha"
        assert str(key) == key.name

    def test_usable_as_mapping_key(self) -> None:
        table: dict[TypeKey, str] = {type_key(Alpha): "a", type_key(Beta): "b"}
        assert table[type_key(Alpha)] == "a"

    def test_accepts_instances_and_subclass_instances(self) -> None:
        key = type_key(Alpha)
        assert key.accepts(Alpha())
        assert key.accepts(AlphaChild())
        assert not key.accepts(Beta())

    def test_key_of_value(self) -> None:
        assert key_of(Beta()) is type_key(Beta)
        assert key_of(4.0) is type_key(float)

    def test_frozen(self) -> None:
        key = type_key(Alpha)
        with pytest.raises(AttributeError):
            key.name = "other"  # type: ignore[misc]
