"""Unit tests for menu command handlers."""

from decimal import Decimal

import pytest
import pytest_asyncio

from application.menu.commands import (
    AddPlateCommand,
    AddPlateCommandHandler,
    CreateMenuCommand,
    CreateMenuCommandHandler,
    DeleteMenuCommand,
    DeleteMenuCommandHandler,
    DeletePlateCommand,
    DeletePlateCommandHandler,
    RegenerateVariantsCommand,
    RegenerateVariantsCommandHandler,
    UpdateMenuCommand,
    UpdateMenuCommandHandler,
    UpdatePlateCommand,
    UpdatePlateCommandHandler,
)
from domain.menu.core.events import MenuDeleted, PlateDeleted, PlateVariantsRegenerated
from domain.menu.core.value_objects.variant import PlateVariant
from infrastructure.persistence.repositories import MenuRepository
from payloads import croissant_payload


@pytest.fixture
def menus(store) -> MenuRepository:
    return MenuRepository(store)


@pytest_asyncio.fixture
async def saved_menu(menus, make_menu):
    menu = make_menu()
    await menus.save(menu)
    return menu


def published(event_bus, event_type):
    return [c.args[0] for c in event_bus.publish.await_args_list if isinstance(c.args[0], event_type)]


class TestCreateMenu:
    """Test CreateMenuCommandHandler."""

    @pytest.mark.asyncio
    async def test_create_with_plates(self, store, menus, event_bus, id_factory) -> None:
        """Plates are stored with their variant caches; one event per plate."""
        await store.set("restaurants", "rest-1", {"name": "Trattoria"})
        handler = CreateMenuCommandHandler(store, menus, event_bus, id_factory)

        result = await handler.handle(
            CreateMenuCommand(restaurant_id="rest-1", name="Breakfast", plates=[croissant_payload()])
        )

        assert result.success
        menu = result.data
        assert menu.id == "id-1"
        stored = await menus.get_by_id(menu.id)
        assert len(stored.plates[0].variants) == 4
        events = published(event_bus, PlateVariantsRegenerated)
        assert [(e.plate_id, e.variant_count) for e in events] == [(menu.plates[0].id, 4)]

    @pytest.mark.asyncio
    async def test_unknown_restaurant(self, store, menus, event_bus) -> None:
        handler = CreateMenuCommandHandler(store, menus, event_bus)

        result = await handler.handle(CreateMenuCommand(restaurant_id="ghost", name="Lunch"))

        assert result.error_code == "NOT_FOUND"
        assert await menus.list_by_restaurant("ghost") == []
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_plate_rejected(self, store, menus, event_bus) -> None:
        await store.set("restaurants", "rest-1", {"name": "Trattoria"})
        handler = CreateMenuCommandHandler(store, menus, event_bus)
        plate = croissant_payload()
        plate["basePrice"] = -1

        result = await handler.handle(CreateMenuCommand(restaurant_id="rest-1", name="Lunch", plates=[plate]))

        assert result.error_code == "VALIDATION_FAILED"
        assert "basePrice" in result.error


class TestUpdateMenu:
    """Test UpdateMenuCommandHandler."""

    @pytest.mark.asyncio
    async def test_partial_update(self, store, menus, saved_menu) -> None:
        handler = UpdateMenuCommandHandler(store, menus)

        result = await handler.handle(UpdateMenuCommand(menu_id="menu-1", name="Brunch"))

        assert result.data.name == "Brunch"
        assert (await menus.get_by_id("menu-1")).description == saved_menu.description

    @pytest.mark.asyncio
    async def test_activation_deactivates_siblings(self, store, menus, make_menu) -> None:
        """A restaurant keeps at most one active menu."""
        await menus.save(make_menu("menu-1"))
        other = make_menu("menu-2")
        other.active = False
        await menus.save(other)
        await menus.save(make_menu("menu-3", restaurant_id="rest-2"))

        result = await UpdateMenuCommandHandler(store, menus).handle(
            UpdateMenuCommand(menu_id="menu-2", active=True)
        )

        assert result.success
        assert (await menus.get_by_id("menu-1")).active is False
        assert (await menus.get_by_id("menu-2")).active is True
        assert (await menus.get_by_id("menu-3")).active is True

    @pytest.mark.asyncio
    async def test_unknown_menu(self, store, menus) -> None:
        result = await UpdateMenuCommandHandler(store, menus).handle(UpdateMenuCommand(menu_id="nope", name="X"))
        assert result.error_code == "NOT_FOUND"


class TestDeleteMenu:
    """Test DeleteMenuCommandHandler."""

    @pytest.mark.asyncio
    async def test_delete_menu(self, store, menus, event_bus, saved_menu) -> None:
        handler = DeleteMenuCommandHandler(store, menus, event_bus)

        result = await handler.handle(DeleteMenuCommand("menu-1"))

        assert result.success
        assert await menus.get_by_id("menu-1") is None
        assert await menus.list_by_restaurant("rest-1") == []
        event = event_bus.publish.await_args.args[0]
        assert isinstance(event, MenuDeleted)
        assert (event.menu_id, event.restaurant_id) == ("menu-1", "rest-1")

    @pytest.mark.asyncio
    async def test_menu_can_be_recreated(self, store, menus, event_bus, saved_menu, make_menu) -> None:
        await DeleteMenuCommandHandler(store, menus, event_bus).handle(DeleteMenuCommand("menu-1"))

        await menus.save(make_menu())

        assert (await menus.get_by_id("menu-1")).plates[0].id == "croissant"

    @pytest.mark.asyncio
    async def test_delete_unknown_menu(self, store, menus, event_bus) -> None:
        result = await DeleteMenuCommandHandler(store, menus, event_bus).handle(DeleteMenuCommand("nope"))

        assert result.error_code == "NOT_FOUND"
        event_bus.publish.assert_not_awaited()


class TestPlateCommands:
    """Test add, update and delete plate handlers."""

    @pytest.mark.asyncio
    async def test_add_plate(self, store, menus, event_bus, saved_menu) -> None:
        handler = AddPlateCommandHandler(store, menus, event_bus)

        result = await handler.handle(
            AddPlateCommand(menu_id="menu-1", plate={"name": "Espresso", "basePrice": 1.2})
        )

        assert result.success
        stored = await menus.get_by_id("menu-1")
        assert [p.name for p in stored.plates] == ["Croissant", "Espresso"]
        espresso = stored.plates[1]
        assert [(v.variant_key, v.price) for v in espresso.variants] == [("default", Decimal("1.2"))]
        assert published(event_bus, PlateVariantsRegenerated)[0].plate_id == espresso.id

    @pytest.mark.asyncio
    async def test_price_change_regenerates_variants(self, store, menus, event_bus, saved_menu) -> None:
        handler = UpdatePlateCommandHandler(store, menus, event_bus)

        result = await handler.handle(
            UpdatePlateCommand(menu_id="menu-1", plate_id="croissant", changes={"basePrice": 4.99})
        )

        assert result.success
        plate = (await menus.get_by_id("menu-1")).find_plate("croissant")
        assert plate.find_variant("size:large").price == Decimal("6.49")
        assert len(published(event_bus, PlateVariantsRegenerated)) == 1

    @pytest.mark.asyncio
    async def test_section_change_rebuilds_cache(self, store, menus, event_bus, saved_menu) -> None:
        """Variants never outlive the sections they were built from."""
        handler = UpdatePlateCommandHandler(store, menus, event_bus)
        sections = [
            {
                "id": "milk",
                "name": "Milk",
                "required": True,
                "options": [{"id": "oat", "name": "Oat", "additionalCost": 0.4}],
            }
        ]

        await handler.handle(UpdatePlateCommand(menu_id="menu-1", plate_id="croissant", changes={"sections": sections}))

        plate = (await menus.get_by_id("menu-1")).find_plate("croissant")
        assert {v.variant_key for v in plate.variants} == {"milk:oat"}
        assert plate.find_variant("size:large") is None

    @pytest.mark.asyncio
    async def test_name_change_keeps_variants(self, store, menus, event_bus, saved_menu) -> None:
        handler = UpdatePlateCommandHandler(store, menus, event_bus)
        before = [v.id for v in saved_menu.plates[0].variants]

        await handler.handle(UpdatePlateCommand(menu_id="menu-1", plate_id="croissant", changes={"name": "Cornetto"}))

        plate = (await menus.get_by_id("menu-1")).find_plate("croissant")
        assert plate.name == "Cornetto"
        assert [v.id for v in plate.variants] == before
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_unknown_plate(self, store, menus, event_bus, saved_menu) -> None:
        handler = UpdatePlateCommandHandler(store, menus, event_bus)

        result = await handler.handle(UpdatePlateCommand(menu_id="menu-1", plate_id="nope", changes={"name": "X"}))

        assert result.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_plate(self, store, menus, event_bus, saved_menu) -> None:
        handler = DeletePlateCommandHandler(store, menus, event_bus)

        result = await handler.handle(DeletePlateCommand(menu_id="menu-1", plate_id="croissant"))

        assert result.success
        assert (await menus.get_by_id("menu-1")).plates == []
        assert published(event_bus, PlateDeleted)[0].plate_id == "croissant"

    @pytest.mark.asyncio
    async def test_delete_unknown_plate(self, store, menus, event_bus, saved_menu) -> None:
        result = await DeletePlateCommandHandler(store, menus, event_bus).handle(
            DeletePlateCommand(menu_id="menu-1", plate_id="nope")
        )
        assert result.error_code == "NOT_FOUND"
        event_bus.publish.assert_not_awaited()


class TestRegenerateVariants:
    """Test RegenerateVariantsCommandHandler."""

    @pytest.mark.asyncio
    async def test_repairs_stale_cache(self, store, menus, event_bus, make_menu) -> None:
        """A stored cache with a wrong price is rebuilt from the sections."""
        menu = make_menu()
        plate = menu.plates[0]
        plate.variants = [PlateVariant("stale", "size:large", "Large", Decimal("99"), (), True)]
        await menus.save(menu)
        await menus.save(make_menu("menu-2", restaurant_id="rest-2"))

        result = await RegenerateVariantsCommandHandler(store, menus, event_bus).handle(
            RegenerateVariantsCommand(restaurant_id="rest-1")
        )

        assert (result.data.menus, result.data.plates, result.data.variants) == (1, 1, 4)
        repaired = (await menus.get_by_id("menu-1")).find_plate("croissant")
        assert repaired.find_variant("size:large").price == Decimal("5.49")
        assert len(published(event_bus, PlateVariantsRegenerated)) == 1

    @pytest.mark.asyncio
    async def test_single_menu(self, store, menus, event_bus, make_menu) -> None:
        await menus.save(make_menu("menu-1"))
        await menus.save(make_menu("menu-2"))

        result = await RegenerateVariantsCommandHandler(store, menus, event_bus).handle(
            RegenerateVariantsCommand(restaurant_id="rest-1", menu_id="menu-2")
        )

        assert result.data.menus == 1
