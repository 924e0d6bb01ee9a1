"""
Pure list transformations behind the cart mutations.

Each function takes the current line items and returns a new list; the input
list and its items are never modified.
"""

import logging
from typing import List

from ..models import AddRequest, LineItem

logger = logging.getLogger(__name__)


def add_item(products: List[LineItem], item: AddRequest) -> List[LineItem]:
    """
    Add a product, or bump its quantity when the id is already in the cart.
    
    Args:
        products: Current line items
        item: Product to add
        
    Returns:
        The next list of line items
    """
    if any(product.id == item.id for product in products):
        return increment_item(products, item.id)
    
    if item.quantity is not None and item.quantity != 1:
        logger.debug(f"Ignoring requested quantity {item.quantity} for new item {item.id}")
    
    return [*products, item.to_line_item()]


def increment_item(products: List[LineItem], item_id: str) -> List[LineItem]:
    """Raise the quantity of the matching item by one."""
    return [
        product.model_copy(update={"quantity": product.quantity + 1})
        if product.id == item_id else product
        for product in products
    ]


def decrement_item(products: List[LineItem], item_id: str) -> List[LineItem]:
    """Lower the quantity of the matching item by one, removing it at zero."""
    must_remove = any(
        product.id == item_id and product.quantity == 1 for product in products
    )
    
    if must_remove:
        return [product for product in products if product.id != item_id]
    
    return [
        product.model_copy(update={"quantity": product.quantity - 1})
        if product.id == item_id else product
        for product in products
    ]


def clear_items(products: List[LineItem]) -> List[LineItem]:
    """Drop every line item."""
    return []
