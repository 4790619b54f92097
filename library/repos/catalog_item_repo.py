"""Repository helpers for catalog items."""

from library.db_accessor import DB_Accessor
from library.models import CatalogItem


class CatalogItemRepo(DB_Accessor):
    """Repository for catalog item queries used by visibility checks."""
    def __init__(self) -> None:
        """Initialise with the CatalogItem model."""
        super().__init__(CatalogItem)

    def get_by_id(self, item_id):
        """Return an item with its owner loaded, or None."""
        return self.query(id=item_id).select_related("owner").first()

    def owner_has_public_items(self, owner_id) -> bool:
        """Return True if owner_id has at least one item marked public."""
        return self.exists(owner_id=owner_id, visibility=CatalogItem.VISIBILITY_PUBLIC)
