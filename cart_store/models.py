"""
Shared data models for the cart store.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class LineItem(BaseModel):
    """Model for one product entry in the cart."""
    
    model_config = ConfigDict(validate_assignment=True)
    
    id: str
    title: str
    image_url: str
    price: float
    quantity: int = Field(default=1, ge=1)


class AddRequest(BaseModel):
    """Model for a request to put a product into the cart."""
    
    model_config = ConfigDict(validate_assignment=True)
    
    id: str
    title: str
    image_url: str
    price: float
    quantity: Optional[int] = None  # Ignored; new items always start at 1
    
    def to_line_item(self) -> LineItem:
        """Build a fresh line item at quantity 1."""
        return LineItem(
            id=self.id,
            title=self.title,
            image_url=self.image_url,
            price=self.price,
            quantity=1
        )
