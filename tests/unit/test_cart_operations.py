"""
Unit tests for the pure cart list operations.
"""

from cart_store.cart.operations import add_item, clear_items, decrement_item, increment_item
from cart_store.models import AddRequest, LineItem


def make_item(item_id: str = "1", quantity: int = 1) -> LineItem:
    return LineItem(id=item_id, title="A", image_url="u", price=10, quantity=quantity)


def make_request(item_id: str = "1", **kwargs) -> AddRequest:
    fields = dict(id=item_id, title="A", image_url="u", price=10)
    fields.update(kwargs)
    return AddRequest(**fields)


class TestAddItem:
    """Test add_item operation."""
    
    def test_add_to_empty_cart(self):
        """Adding to an empty cart creates one entry at quantity one."""
        result = add_item([], make_request())
        
        assert result == [LineItem(id="1", title="A", image_url="u", price=10, quantity=1)]
    
    def test_add_existing_id_increments_quantity(self):
        """Adding an id already in the cart bumps its quantity without a new entry."""
        result = add_item([make_item()], make_request())
        
        assert len(result) == 1
        assert result[0].quantity == 2
    
    def test_add_existing_id_keeps_original_fields(self):
        """Re-adding with a different title or price leaves the stored item alone."""
        result = add_item([make_item()], make_request(title="B", price=99, image_url="other"))
        
        assert result[0].title == "A"
        assert result[0].price == 10
        assert result[0].image_url == "u"
    
    def test_add_ignores_requested_quantity(self):
        """New items start at one and existing items go up by one, whatever the request says."""
        inserted = add_item([], make_request(quantity=7))
        assert inserted[0].quantity == 1
        
        bumped = add_item(inserted, make_request(quantity=7))
        assert bumped[0].quantity == 2
    
    def test_add_appends_new_ids_in_order(self):
        result = add_item([make_item("1")], make_request("2"))
        
        assert [item.id for item in result] == ["1", "2"]
    
    def test_add_does_not_modify_input(self):
        products = [make_item()]
        
        add_item(products, make_request())
        
        assert products == [make_item()]


class TestIncrementItem:
    """Test increment_item operation."""
    
    def test_increment_matching_item(self):
        result = increment_item([make_item("1"), make_item("2")], "2")
        
        assert result[0].quantity == 1
        assert result[1].quantity == 2
    
    def test_increment_absent_id_is_noop(self):
        """Incrementing an id that is not in the cart leaves the list unchanged."""
        products = [make_item("1")]
        
        result = increment_item(products, "2")
        
        assert result == [make_item("1")]


class TestDecrementItem:
    """Test decrement_item operation."""
    
    def test_decrement_above_one_keeps_entry(self):
        result = decrement_item([make_item(quantity=2)], "1")
        
        assert result == [make_item(quantity=1)]
    
    def test_decrement_at_one_removes_entry(self):
        """Decrementing an item at quantity one removes it entirely."""
        result = decrement_item([make_item(quantity=1)], "1")
        
        assert result == []
    
    def test_decrement_only_touches_matching_item(self):
        result = decrement_item([make_item("1", 1), make_item("2", 3)], "1")
        
        assert result == [make_item("2", 3)]
    
    def test_decrement_absent_id_is_noop(self):
        result = decrement_item([make_item("1")], "2")
        
        assert result == [make_item("1")]


def test_clear_items_returns_empty_list():
    assert clear_items([make_item("1"), make_item("2")]) == []
