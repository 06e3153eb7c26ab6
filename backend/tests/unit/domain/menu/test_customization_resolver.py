"""Unit tests for the customization resolver."""

from dataclasses import replace
from decimal import Decimal

import pytest

from domain.menu.core.entities.plate import Plate
from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.section import MenuOption, MenuSection
from domain.menu.core.value_objects.selection import OptionSelection
from domain.menu.services.customization_resolver import (
    lookup_variant,
    missing_required_sections,
    overselected_sections,
    resolve_customization,
    validate_selections,
)
from domain.menu.services.variant_generator import generate_variants
from domain.shared.errors import StaleVariantCacheError, ValidationFailedError


class TestResolveCustomization:
    """Test resolve_customization()."""

    def test_large_matches_precomputed_variant(self, croissant: Plate) -> None:
        """Selecting Large prices 5.49 and matches the Large variant."""
        result = resolve_customization(croissant, [OptionSelection("size", "large")])

        assert result.final_price == Decimal("5.49")
        assert result.matched
        variant = croissant.find_variant("size:large")
        assert result.matched_variant_id == variant.id
        assert variant.variant_name == "Large"
        assert result.custom_ingredients is None

    def test_selected_option_details(self, croissant: Plate) -> None:
        result = resolve_customization(
            croissant,
            [OptionSelection("filling", "chocolate"), OptionSelection("size", "regular")],
        )

        assert [(d.section_name, d.option_name) for d in result.selected_options] == [
            ("Filling", "Chocolate"),
            ("Size", "Regular"),
        ]
        assert result.final_price == Decimal("4.99")

    def test_order_of_selections_does_not_matter(self, croissant: Plate) -> None:
        a = resolve_customization(
            croissant, [OptionSelection("size", "large"), OptionSelection("filling", "chocolate")]
        )
        b = resolve_customization(
            croissant, [OptionSelection("filling", "chocolate"), OptionSelection("size", "large")]
        )
        assert a.final_price == b.final_price == Decimal("6.49")
        assert a.matched_variant_id == b.matched_variant_id

    def test_unknown_pairs_are_ignored(self, croissant: Plate) -> None:
        """Stale section or option ids contribute nothing."""
        result = resolve_customization(
            croissant,
            [
                OptionSelection("size", "large"),
                OptionSelection("size", "gone"),
                OptionSelection("removed", "x"),
            ],
        )
        assert result.final_price == Decimal("5.49")
        assert len(result.selected_options) == 1

    def test_duplicate_pairs_count_once(self, croissant: Plate) -> None:
        result = resolve_customization(
            croissant, [OptionSelection("size", "large"), OptionSelection("size", "large")]
        )
        assert result.final_price == Decimal("5.49")
        assert result.matched

    def test_pure(self, croissant: Plate) -> None:
        """Identical inputs give identical results."""
        selections = [OptionSelection("size", "large")]
        assert resolve_customization(croissant, selections) == resolve_customization(
            croissant, selections
        )


class TestStaleCacheFallback:
    """Test the fallback when the variant cache has no entry."""

    def test_empty_cache_computes_ingredients(self, croissant: Plate) -> None:
        """Price is unchanged and ingredients are computed directly."""
        stale = replace(croissant, variants=[])

        result = resolve_customization(
            stale, [OptionSelection("size", "regular"), OptionSelection("filling", "chocolate")]
        )

        assert not result.matched
        assert result.final_price == Decimal("4.99")
        assert [i.name for i in result.custom_ingredients] == ["Flour", "Butter", "Chocolate"]

    def test_multi_select_combination_falls_back(self) -> None:
        """Two options of one multi-select section have no cached variant."""
        toppings = MenuSection(
            "top",
            "Toppings",
            multiple=True,
            ingredient_dependent=True,
            options=(
                MenuOption("ham", "Ham", Decimal("1.00"), (Ingredient("Ham"),)),
                MenuOption("egg", "Egg", Decimal("0.50"), (Ingredient("Egg"),)),
            ),
        )
        plate = Plate(
            id="toast",
            name="Toast",
            base_price=Decimal("2.00"),
            base_ingredients=[Ingredient("Bread", True)],
            sections=[toppings],
        )
        plate.variants = generate_variants(plate.base_price, plate.base_ingredients, plate.sections)

        result = resolve_customization(
            plate, [OptionSelection("top", "ham"), OptionSelection("top", "egg")]
        )

        assert result.final_price == Decimal("3.50")
        assert not result.matched
        assert [i.name for i in result.custom_ingredients] == ["Bread", "Ham", "Egg"]

    def test_lookup_variant_raises_on_miss(self, croissant: Plate) -> None:
        with pytest.raises(StaleVariantCacheError):
            lookup_variant(croissant, "size:unknown")


class TestMissingRequiredSections:
    """Test missing_required_sections()."""

    def test_reports_unselected_required_section(self, croissant: Plate) -> None:
        missing = missing_required_sections(croissant, [OptionSelection("filling", "chocolate")])
        assert [s.name for s in missing] == ["Size"]

    def test_stale_selection_does_not_satisfy(self, croissant: Plate) -> None:
        missing = missing_required_sections(croissant, [OptionSelection("size", "gone")])
        assert [s.id for s in missing] == ["size"]

    def test_satisfied(self, croissant: Plate) -> None:
        assert missing_required_sections(croissant, [OptionSelection("size", "regular")]) == []

    def test_required_section_without_options_is_ignored(self) -> None:
        plate = Plate(
            id="p",
            name="P",
            base_price=Decimal("1"),
            sections=[MenuSection("empty", "Empty", required=True)],
        )
        assert missing_required_sections(plate, []) == []


class TestSingleChoiceSections:
    """Test overselected_sections() and validate_selections()."""

    def test_two_sizes_reported(self, croissant: Plate) -> None:
        selections = [OptionSelection("size", "regular"), OptionSelection("size", "large")]

        assert [s.name for s in overselected_sections(croissant, selections)] == ["Size"]

    def test_repeated_pair_is_one_choice(self, croissant: Plate) -> None:
        selections = [OptionSelection("size", "large"), OptionSelection("size", "large")]

        assert overselected_sections(croissant, selections) == []

    def test_stale_second_option_is_not_a_choice(self, croissant: Plate) -> None:
        selections = [OptionSelection("size", "large"), OptionSelection("size", "gone")]

        assert overselected_sections(croissant, selections) == []

    def test_multi_select_section_accepts_several(self) -> None:
        toppings = MenuSection(
            "top",
            "Toppings",
            multiple=True,
            options=(MenuOption("ham", "Ham", Decimal("1.00")), MenuOption("egg", "Egg", Decimal("0.50"))),
        )
        plate = Plate(id="toast", name="Toast", base_price=Decimal("2.00"), sections=[toppings])

        validate_selections(plate, [OptionSelection("top", "ham"), OptionSelection("top", "egg")])

    def test_validate_rejects_two_sizes(self, croissant: Plate) -> None:
        with pytest.raises(ValidationFailedError, match="only one option for: Size"):
            validate_selections(croissant, [OptionSelection("size", "regular"), OptionSelection("size", "large")])

    def test_validate_rejects_missing_size(self, croissant: Plate) -> None:
        with pytest.raises(ValidationFailedError, match="select an option for: Size"):
            validate_selections(croissant, [])
