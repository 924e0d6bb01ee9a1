"""
Serialization of the cart line item list.
"""

from typing import List

from pydantic import TypeAdapter, ValidationError

from ..errors import SnapshotError
from ..models import LineItem

_LINE_ITEMS = TypeAdapter(List[LineItem])


def dump_snapshot(items: List[LineItem]) -> str:
    """Serialize line items to the JSON text stored under the cart key."""
    return _LINE_ITEMS.dump_json(items).decode('utf-8')


def load_snapshot(text: str) -> List[LineItem]:
    """
    Parse a stored snapshot back into line items.
    
    Args:
        text: JSON text previously produced by dump_snapshot
        
    Returns:
        List of validated line items
        
    Raises:
        SnapshotError: If the text is not valid JSON, does not match the schema,
            or repeats an item id
    """
    try:
        items = _LINE_ITEMS.validate_json(text)
    except ValidationError as e:
        raise SnapshotError(f"Invalid cart snapshot: {e}") from e
    
    seen = set()
    for item in items:
        if item.id in seen:
            raise SnapshotError(f"Invalid cart snapshot: duplicate id {item.id!r}")
        seen.add(item.id)
    
    return items
