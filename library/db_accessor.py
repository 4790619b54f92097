from typing import Any, Mapping, Optional, Sequence, Type
from django.db.models import Model, QuerySet


class DB_Accessor:
    """Thin wrapper around a model's default manager shared by the repos."""

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def query(self, **lookup: Any) -> QuerySet:
        """Return a queryset filtered by lookup."""
        return self.model.objects.filter(**lookup)

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> QuerySet:
        """Return a filtered, ordered and optionally sliced queryset."""
        qs = self.query(**(filters or {}))
        if order_by:
            qs = qs.order_by(*order_by)
        start = max(0, int(offset))
        if limit is not None:
            return qs[start:start + max(0, int(limit))]
        return qs[start:] if start else qs

    def first(self, **lookup: Any) -> Optional[Model]:
        """Return the first object matching lookup, or None."""
        return self.query(**lookup).first()

    def exists(self, **lookup: Any) -> bool:
        """Return True if any object matches lookup."""
        return self.query(**lookup).exists()

    def get(self, **lookup: Any) -> Model:
        """Fetch a single object matching the lookup."""
        return self.model.objects.get(**lookup)

    def create(self, **data: Any) -> Model:
        """Create and return a new object."""
        return self.model.objects.create(**data)

    def update(self, lookup: Mapping[str, Any], **data: Any) -> int:
        """Update objects matching lookup; return count updated."""
        return self.model.objects.filter(**lookup).update(**data)

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count of rows of this model deleted."""
        _, per_model = self.model.objects.filter(**lookup).delete()
        return per_model.get(self.model._meta.label, 0)
