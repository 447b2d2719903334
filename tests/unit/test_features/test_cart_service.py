import json

import pytest
from unittest.mock import Mock

from ironwings.db.storage import MemoryStore
from ironwings.features.cart.items import ItemKind
from ironwings.features.cart.notifications import Toaster
from ironwings.features.cart.repo import CartRepo, DEFAULT_STORAGE_KEY
from ironwings.features.cart.service import CartService, get_cart, reset_cart


F22 = {"id": "F22", "name": "F-22 Raptor", "price": 1000, "image": "f22.png", "clearance": "TOP SECRET"}
C130 = {"id": "C130", "name": "C-130 Hercules", "price": 250, "image": "c130.png", "category": "transport"}


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def mock_toaster():
    return Mock()


@pytest.fixture
def on_count_changed():
    return Mock()


@pytest.fixture
def on_render():
    return Mock()


@pytest.fixture
def cart_service(store, mock_toaster, on_count_changed, on_render):
    return CartService(repo=CartRepo(store), toaster=mock_toaster,
                       on_count_changed=on_count_changed, on_render=on_render)


def stored_records(store):
    return json.loads(store.get(DEFAULT_STORAGE_KEY))


class TestCartServiceAdd:

    def test_add_new_item(self, cart_service, store):
        item = cart_service.add(F22)

        assert item.id == "F22"
        assert len(cart_service) == 1
        assert cart_service.total == 1000
        assert stored_records(store)[0]["clearance"] == "TOP SECRET"

    def test_add_same_id_increments(self, cart_service):
        cart_service.add(F22)
        cart_service.add(F22)

        assert len(cart_service) == 1
        assert cart_service.get("F22").quantity == 2
        assert cart_service.total == 2000

    def test_add_keeps_insertion_order(self, cart_service):
        cart_service.add(C130)
        cart_service.add(F22)
        cart_service.add(C130)

        assert [i.id for i in cart_service.items] == ["C130", "F22"]

    def test_add_shows_toast(self, cart_service, mock_toaster):
        cart_service.add(F22)
        mock_toaster.show.assert_called_once_with("F-22 Raptor added to cart!")

    def test_add_updates_count_badge(self, cart_service, on_count_changed):
        cart_service.add(F22)
        cart_service.add(C130)

        on_count_changed.assert_called_with({"count": 2, "visible": True, "text": "2"})

    def test_add_ignores_request_quantity(self, cart_service):
        item = cart_service.add({**C130, "quantity": 9})
        assert item.quantity == 1

    def test_add_invalid_request_is_ignored(self, cart_service, store, mock_toaster):
        assert cart_service.add({"name": "No id"}) is None
        assert len(cart_service) == 0
        assert store.get(DEFAULT_STORAGE_KEY) is None
        mock_toaster.show.assert_not_called()


class TestCartServiceMutations:

    def test_remove(self, cart_service, store):
        cart_service.add(F22)
        cart_service.add(C130)

        assert cart_service.remove("F22") is True
        assert [i.id for i in cart_service.items] == ["C130"]
        assert [r["id"] for r in stored_records(store)] == ["C130"]

    def test_remove_unknown_is_noop(self, cart_service):
        cart_service.add(F22)
        assert cart_service.remove("nope") is False
        assert len(cart_service) == 1

    def test_increase_and_decrease(self, cart_service):
        cart_service.add(C130)
        cart_service.increase("C130")
        cart_service.increase("C130")
        assert cart_service.get("C130").quantity == 3

        cart_service.decrease("C130")
        assert cart_service.get("C130").quantity == 2

    def test_decrease_never_removes(self, cart_service):
        cart_service.add(C130)
        for _ in range(5):
            cart_service.decrease("C130")

        assert cart_service.get("C130").quantity == 1
        assert len(cart_service) == 1

    @pytest.mark.parametrize("value,expected", [("7", 7), (3.8, 3), (0, 1), ("", 1), ("abc", 1), (-4, 1)])
    def test_set_quantity_normalizes(self, cart_service, store, value, expected):
        cart_service.add(C130)
        assert cart_service.set_quantity("C130", value) is True
        assert cart_service.get("C130").quantity == expected
        assert stored_records(store)[0]["quantity"] == expected

    @pytest.mark.parametrize("operation", ["increase", "decrease"])
    def test_unknown_id_is_noop(self, cart_service, operation):
        cart_service.add(C130)
        assert getattr(cart_service, operation)("nope") is False
        assert cart_service.get("C130").quantity == 1

    def test_set_quantity_unknown_id(self, cart_service):
        assert cart_service.set_quantity("nope", 5) is False

    def test_clear(self, cart_service, store, on_count_changed):
        cart_service.add(F22)
        cart_service.add(C130)
        cart_service.clear()

        assert len(cart_service) == 0
        assert cart_service.total == 0
        assert stored_records(store) == []
        on_count_changed.assert_called_with({"count": 0, "visible": False, "text": "0"})

    def test_mutations_render_view(self, cart_service, on_render):
        cart_service.add(C130)
        cart_service.increase("C130")

        view = on_render.call_args[0][0]
        assert view["empty"] is False
        assert view["items"][0]["quantity"] == 2
        assert view["total_text"] == "Total: $500.00"


class TestCartServiceState:

    def test_empty_total_is_zero(self, cart_service):
        assert cart_service.total == 0
        assert cart_service.count == 0

    def test_total_is_sum_of_subtotals(self, cart_service):
        cart_service.add(F22)
        cart_service.add(C130)
        cart_service.set_quantity("C130", 4)

        assert cart_service.total == 1000 + 250 * 4
        assert cart_service.count == 5

    def test_items_snapshot_is_detached(self, cart_service):
        cart_service.add(C130)
        snapshot = cart_service.items
        snapshot[0].set_quantity(50)

        assert isinstance(snapshot, tuple)
        assert cart_service.get("C130").quantity == 1

    def test_loads_existing_storage(self, store):
        CartService(repo=CartRepo(store), toaster=Mock()).add(F22)

        reloaded = CartService(repo=CartRepo(store), toaster=Mock())
        assert reloaded.get("F22").kind is ItemKind.CLASSIFIED
        assert reloaded.get("F22").clearance_level == "TOP SECRET"

    def test_corrupt_storage_starts_empty(self, store):
        store.set(DEFAULT_STORAGE_KEY, "]]garbage[[")
        assert len(CartService(repo=CartRepo(store), toaster=Mock())) == 0

    def test_unreadable_storage_starts_empty(self):
        store = Mock()
        store.get.side_effect = OSError("disk gone")
        assert len(CartService(repo=CartRepo(store), toaster=Mock())) == 0

    def test_save_failure_keeps_memory_state(self, on_count_changed):
        store = Mock()
        store.get.return_value = None
        store.set.side_effect = RuntimeError("write failed")
        cart = CartService(repo=CartRepo(store), toaster=Mock(), on_count_changed=on_count_changed)

        cart.add(C130)
        assert cart.get("C130").quantity == 1
        on_count_changed.assert_called_once()

    def test_failing_hook_does_not_break_mutation(self, store):
        cart = CartService(repo=CartRepo(store), toaster=Mock(), on_render=Mock(side_effect=ValueError("boom")))
        assert cart.add(C130) is not None
        assert stored_records(store)[0]["id"] == "C130"

    def test_failing_toast_surface_does_not_break_add(self, store):
        surface = Mock()
        surface.show.side_effect = RuntimeError("no toast element")
        toaster = Toaster(surface, duration=0.01)
        cart = CartService(repo=CartRepo(store), toaster=toaster)

        item = cart.add(F22)
        toaster.cancel()

        assert item.id == "F22"
        assert stored_records(store)[0]["clearance"] == "TOP SECRET"
        surface.show.assert_called_once_with("F-22 Raptor added to cart!")


class TestCartServiceView:

    def test_bind_view_renders_immediately(self, store):
        cart = CartService(repo=CartRepo(store), toaster=Mock())
        view_hook = Mock()
        cart.bind_view(view_hook)

        view = view_hook.call_args[0][0]
        assert view["empty"] is True
        assert view["total_text"] == "Total: $0.00"

    def test_unbind_view(self, cart_service, on_render):
        cart_service.unbind_view()
        cart_service.add(C130)
        on_render.assert_not_called()

    def test_render_without_view_returns_model(self, store):
        cart = CartService(repo=CartRepo(store), toaster=Mock())
        cart.add(F22)
        assert cart.render()["items"][0]["badge"] == "TOP SECRET"


class TestCartScenario:

    def test_f22_walkthrough(self, cart_service, store):
        cart_service.add(F22)
        assert len(cart_service) == 1
        assert cart_service.get("F22").quantity == 1
        assert cart_service.total == 1000
        assert stored_records(store)[0]["clearance"] == "TOP SECRET"

        cart_service.add(F22)
        assert cart_service.get("F22").quantity == 2
        assert cart_service.total == 2000

        cart_service.decrease("F22")
        assert cart_service.get("F22").quantity == 1
        assert cart_service.total == 1000

        cart_service.remove("F22")
        assert len(cart_service) == 0
        assert cart_service.total == 0


class TestGetCart:

    @pytest.fixture(autouse=True)
    def fresh_singleton(self):
        reset_cart()
        yield
        reset_cart()

    def test_returns_same_instance(self, store):
        first = get_cart(store=store)
        second = get_cart(store=MemoryStore())
        assert first is second

    def test_does_not_reload(self, store):
        cart = get_cart(store=store)
        store.set(DEFAULT_STORAGE_KEY, json.dumps([C130]))

        assert len(get_cart()) == 0
        assert cart.repo.store is store

    def test_reset_reloads_from_storage(self, store):
        get_cart(store=store).add(C130)
        reset_cart()

        assert get_cart(store=store).get("C130") is not None

    def test_uses_configured_key(self, store):
        cfg = Mock(STORAGE_KEY="custom_key", CURRENCY_SYMBOL="£", TOAST_DURATION_SECONDS=1.0)
        cart = get_cart(cfg=cfg, store=store)
        cart.add(C130)

        assert store.get("custom_key") is not None
        assert cart.render()["items"][0]["price_text"] == "£250"
