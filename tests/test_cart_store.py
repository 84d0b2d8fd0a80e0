import pytest

from conftest import log_events
from storefront.common.models.cart_item import CartItem
from storefront.services import CartStore


def _item(id=1, name="A", price=10.0, quantity=1, image=None):
    return CartItem(id=id, name=name, price=price, quantity=quantity, image=image)


@pytest.fixture
def cart(storage):
    store = CartStore(storage)
    store.init()
    return store


def test_add_with_same_id_merges_quantity(cart):
    cart.add_to_cart(_item(quantity=2))
    cart.add_to_cart(_item(quantity=3))

    assert [it.to_dict() for it in cart.items] == [{"id": 1, "name": "A", "price": 10.0, "quantity": 5}]


def test_merge_keeps_one_row_per_id_for_any_sequence(cart):
    quantities = [1, 4, 2, 7]
    for q in quantities:
        cart.add_to_cart(_item(id=3, quantity=q))
        cart.add_to_cart(_item(id=9, quantity=1))

    rows = [it for it in cart.items if it.id == 3]
    assert len(rows) == 1
    assert rows[0].quantity == sum(quantities)


def test_insertion_order_is_display_order(cart):
    cart.add_to_cart(_item(id=2))
    cart.add_to_cart(_item(id=1))
    cart.add_to_cart(_item(id=2))
    assert [it.id for it in cart.items] == [2, 1]


def test_update_quantity_sets_value_verbatim(cart):
    cart.add_to_cart(_item(quantity=2))
    cart.update_quantity(1, 9)
    assert cart.get(1).quantity == 9


def test_update_quantity_on_missing_id_is_noop(cart):
    cart.add_to_cart(_item(quantity=2))
    before = cart.items

    cart.update_quantity(99, 3)

    assert cart.items == before


def test_remove_twice_does_not_raise(cart):
    cart.add_to_cart(_item(id=1))
    cart.add_to_cart(_item(id=2))

    cart.remove_from_cart(1)
    cart.remove_from_cart(1)

    assert [it.id for it in cart.items] == [2]


def test_clear_cart(cart, storage):
    cart.add_to_cart(_item())
    cart.clear_cart()
    assert cart.items == []
    assert storage.load("cart") == []


def test_derived_totals(cart):
    cart.add_to_cart(_item(id=1, price=10.0, quantity=2))
    cart.add_to_cart(_item(id=2, price=5.5, quantity=1))
    assert cart.item_count == 3
    assert cart.subtotal == pytest.approx(25.5)


def test_every_mutation_is_persisted_and_reloaded(cart, storage):
    cart.add_to_cart(_item(id=1, quantity=2, image="a.png"))
    cart.add_to_cart(_item(id=2, price=4.0))
    cart.update_quantity(2, 6)

    reloaded = CartStore(storage)
    reloaded.init()

    assert reloaded.items == cart.items
    assert storage.load("cart")[0]["image"] == "a.png"


def test_zero_quantity_written_by_update_survives_reload(cart, storage):
    cart.add_to_cart(_item(id=1, quantity=2))
    cart.add_to_cart(_item(id=2))
    cart.update_quantity(2, 0)

    reloaded = CartStore(storage)
    reloaded.init()

    assert [(it.id, it.quantity) for it in reloaded.items] == [(1, 2), (2, 0)]


def test_items_are_copies(cart):
    cart.add_to_cart(_item(quantity=2))
    cart.items[0].quantity = 100
    assert cart.get(1).quantity == 2


def test_added_item_is_not_aliased(cart):
    item = _item(quantity=2)
    cart.add_to_cart(item)
    item.quantity = 50
    assert cart.get(1).quantity == 2


def test_corrupt_storage_starts_empty_and_stays_usable(storage, capsys):
    storage.path_for("cart").write_text("definitely not json", encoding="utf-8")
    cart = CartStore(storage)

    cart.init()
    cart.add_to_cart(_item())

    assert [it.id for it in cart.items] == [1]
    assert storage.load("cart")[0]["id"] == 1
    events = [e["event"] for e in log_events(capsys.readouterr().out)]
    assert "storage.parse_failed" in events


@pytest.mark.parametrize(
    "raw",
    [
        {"id": 1},
        [{"id": "one", "name": "A", "price": 1, "quantity": 1}],
        [{"id": 1, "name": "A", "price": -1, "quantity": 1}],
        [{"id": 1, "name": "A", "price": 1, "quantity": 1.5}],
        ["nope"],
    ],
)
def test_schema_mismatch_starts_empty(storage, capsys, raw):
    storage.save("cart", raw)
    cart = CartStore(storage)

    cart.init()

    assert cart.items == []
    events = [e["event"] for e in log_events(capsys.readouterr().out)]
    assert "storage.schema_mismatch" in events


def test_duplicate_persisted_rows_are_merged(storage):
    storage.save(
        "cart",
        [
            {"id": 1, "name": "A", "price": 10, "quantity": 2},
            {"id": 1, "name": "A", "price": 10, "quantity": 3},
        ],
    )
    cart = CartStore(storage)
    cart.init()
    assert [(it.id, it.quantity) for it in cart.items] == [(1, 5)]


def test_subscribers_are_notified_after_persist(cart, storage):
    seen = []
    unsubscribe = cart.subscribe(lambda store: seen.append(storage.load("cart")))

    cart.add_to_cart(_item())
    unsubscribe()
    cart.clear_cart()

    assert seen == [[{"id": 1, "name": "A", "price": 10.0, "quantity": 1}]]


def test_take_all_returns_items_and_empties(cart):
    cart.add_to_cart(_item(id=1))
    cart.add_to_cart(_item(id=2))
    taken = cart.take_all()
    assert [it.id for it in taken] == [1, 2]
    assert cart.items == []
