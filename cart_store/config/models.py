"""
Configuration models using Pydantic for validation.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional


DEFAULT_STORAGE_KEY = "@GoMarketplace:products"


class CartConfig(BaseModel):
    """Configuration model for the cart store."""
    
    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid"
    )
    
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Key under which the cart snapshot is persisted"
    )
    storage_backend: Literal["file", "memory"] = Field(
        default="file",
        description="Key-value storage used for persistence"
    )
    storage_dir: Optional[str] = Field(
        default=None,
        description="Directory for the file backend. If None, uses ~/.go_marketplace/storage"
    )
    keep_backup: bool = Field(
        default=True,
        description="If True, the file backend keeps a copy of the previous snapshot"
    )
