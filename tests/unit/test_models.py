"""
Unit tests for cart data models.
"""

import pytest
from pydantic import ValidationError

from cart_store.models import AddRequest, LineItem


class TestLineItem:
    """Test LineItem model."""
    
    def test_line_item_defaults_to_quantity_one(self):
        """Test that a line item without quantity starts at one."""
        item = LineItem(id="1", title="A", image_url="u", price=10)
        
        assert item.quantity == 1
        assert item.price == 10.0
    
    def test_line_item_rejects_zero_quantity(self):
        """Test that quantity must be at least one."""
        with pytest.raises(ValidationError):
            LineItem(id="1", title="A", image_url="u", price=10, quantity=0)
    
    def test_line_item_validates_assignment(self):
        """Test that assignments are validated too."""
        item = LineItem(id="1", title="A", image_url="u", price=10)
        
        with pytest.raises(ValidationError):
            item.quantity = -1


class TestAddRequest:
    """Test AddRequest model."""
    
    def test_quantity_is_optional(self):
        request = AddRequest(id="1", title="A", image_url="u", price=10)
        assert request.quantity is None
    
    def test_to_line_item_always_starts_at_one(self):
        """Test that a requested quantity does not carry over to the new item."""
        request = AddRequest(id="1", title="A", image_url="u", price=10, quantity=5)
        
        item = request.to_line_item()
        
        assert item == LineItem(id="1", title="A", image_url="u", price=10, quantity=1)
