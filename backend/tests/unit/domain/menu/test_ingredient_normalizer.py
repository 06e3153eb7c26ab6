"""Unit tests for ingredient normalization and merging."""

from domain.menu.core.value_objects.ingredient import (
    Ingredient,
    NestedLegacyIngredient,
    ObjectIngredient,
    StringIngredient,
    UnknownIngredient,
    classify_raw_ingredient,
)
from domain.menu.services.ingredient_normalizer import merge_ingredients, normalize_ingredients


class TestClassifyRawIngredient:
    """Test resolution of raw shapes into the tagged union."""

    def test_string(self) -> None:
        """Bare names are string ingredients."""
        assert classify_raw_ingredient("Tomato") == StringIngredient("Tomato")

    def test_object(self) -> None:
        """{name, obligatory} is the current shape."""
        raw = classify_raw_ingredient({"name": "Salt", "obligatory": True})
        assert raw == ObjectIngredient(Ingredient("Salt", True))

    def test_object_with_extra_keys(self) -> None:
        """Extra keys do not demote the current shape."""
        raw = classify_raw_ingredient({"name": "Salt", "obligatory": False, "id": "x"})
        assert isinstance(raw, ObjectIngredient)

    def test_nested_legacy_both_spellings(self) -> None:
        """Legacy groups accept the misspelled key too."""
        a = classify_raw_ingredient({"ingredients": ["Flour"], "obligatory": True})
        b = classify_raw_ingredient({"ingridients": ["Flour"], "obligatory": True})
        assert a == b == NestedLegacyIngredient(("Flour",), True)

    def test_unknown(self) -> None:
        """Anything else falls through to unknown."""
        assert isinstance(classify_raw_ingredient(42), UnknownIngredient)
        assert isinstance(classify_raw_ingredient({"name": "NoFlag"}), UnknownIngredient)


class TestNormalizeIngredients:
    """Test normalize_ingredients()."""

    def test_none_is_empty(self) -> None:
        """None normalizes to an empty list."""
        assert normalize_ingredients(None) == []

    def test_mixed_shapes_flatten_in_order(self) -> None:
        """Legacy groups are flattened in place."""
        result = normalize_ingredients(
            [
                "Flour",
                {"ingredients": ["Egg", "Milk"], "obligatory": True},
                {"name": "Sugar", "obligatory": False},
                7,
            ]
        )

        assert result == [
            Ingredient("Flour", False),
            Ingredient("Egg", True),
            Ingredient("Milk", True),
            Ingredient("Sugar", False),
            Ingredient("7", False),
        ]

    def test_no_deduplication(self) -> None:
        """Normalization keeps repeated names; merging deduplicates."""
        assert len(normalize_ingredients(["Salt", "Salt"])) == 2

    def test_idempotent_for_legacy_shapes(self) -> None:
        """normalize(normalize(x)) == normalize(x)."""
        raw = [
            "Tomato",
            {"ingridients": ["Basil", "Oil"], "obligatory": False},
            {"name": "Mozzarella", "obligatory": True},
            None,
        ]
        once = normalize_ingredients(raw)
        assert normalize_ingredients(once) == once

    def test_idempotent_through_documents(self) -> None:
        """Normalized output survives a round trip through its stored shape."""
        once = normalize_ingredients(["Tomato", {"ingredients": ["Basil"], "obligatory": True}])
        stored = [{"name": i.name, "obligatory": i.obligatory} for i in once]
        assert normalize_ingredients(stored) == once

    def test_empty_legacy_group(self) -> None:
        """A legacy group with no names contributes nothing."""
        assert normalize_ingredients([{"ingredients": None, "obligatory": True}]) == []


class TestMergeIngredients:
    """Test merge_ingredients()."""

    def test_first_occurrence_wins(self) -> None:
        """Salt(false) then Salt(true) keeps one Salt(false)."""
        merged = merge_ingredients([Ingredient("Salt", False)], [Ingredient("Salt", True)])
        assert merged == [Ingredient("Salt", False)]

    def test_preserves_order(self) -> None:
        """Names keep first-seen order across lists."""
        merged = merge_ingredients(
            [Ingredient("Flour"), Ingredient("Butter")],
            [Ingredient("Chocolate"), Ingredient("Flour", True)],
        )
        assert [i.name for i in merged] == ["Flour", "Butter", "Chocolate"]

    def test_no_lists(self) -> None:
        assert merge_ingredients() == []
