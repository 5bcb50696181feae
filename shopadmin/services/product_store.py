"""Product repository on top of a list-shaped store."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from shopadmin.models import Product, ProductDraft
from shopcommon.slugs import slugify
from shopcommon.storage import ListStore, ParseError, StoreError

# Keys callers may not overwrite through ``update``.
_PROTECTED = {"id", "lastUpdated"}


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def _new_id() -> str:
    return str(uuid4())


def _alias_map() -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for name, info in Product.model_fields.items():
        mapping[name] = info.alias or name
    return mapping


_ALIASES = _alias_map()


def _parse(records: list[dict]) -> list[Product]:
    try:
        return [Product.model_validate(item) for item in records]
    except ValidationError as exc:
        raise ParseError(f"Stored product does not match the expected shape: {exc}") from exc


@dataclass(slots=True)
class ProductRepository:
    """High-level operations for the product collection.

    Every call reloads the collection from ``store``; returned products are
    snapshots and changing them has no effect on storage.
    """

    store: ListStore
    clock: Callable[[], datetime.datetime] = _utcnow
    id_factory: Callable[[], str] = _new_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _timestamp(self, previous: Optional[str] = None) -> str:
        now = self.clock()
        if previous:
            try:
                prior = datetime.datetime.fromisoformat(previous)
            except ValueError:
                prior = None
            if prior is not None and (prior.tzinfo is None) == (now.tzinfo is None) and now <= prior:
                now = prior + datetime.timedelta(microseconds=1)
        return now.isoformat()

    def _fresh_id(self, taken: set[str]) -> str:
        candidate = self.id_factory()
        while candidate in taken:
            candidate = self.id_factory()
        return candidate

    def _normalise_updates(self, updates: Mapping[str, Any] | BaseModel) -> Dict[str, Any]:
        if isinstance(updates, BaseModel):
            updates = updates.model_dump(by_alias=True, exclude_unset=True)
        cleaned: Dict[str, Any] = {}
        for key, value in updates.items():
            if value is None:
                continue
            key = _ALIASES.get(key, key)
            if key in _PROTECTED:
                continue
            cleaned[key] = value
        return cleaned

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_all(self) -> list[Product]:
        return _parse(self.store.load())

    def find_by_slug(self, slug: str) -> Optional[Product]:
        for product in self.list_all():
            if product.slug == slug:
                return product
        return None

    def find_by_id(self, product_id: str) -> Optional[Product]:
        target = str(product_id)
        for product in self.list_all():
            if product.id == target:
                return product
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, draft: ProductDraft | Mapping[str, Any]) -> Product:
        if not isinstance(draft, ProductDraft):
            draft = ProductDraft.model_validate(dict(draft))
        fields = draft.model_dump(by_alias=True, exclude={"slug"})
        created: Optional[Product] = None

        def mutator(items: list[dict]) -> list[dict]:
            nonlocal created
            _parse(items)
            taken = {str(item.get("id")) for item in items}
            record = {
                **fields,
                "id": self._fresh_id(taken),
                "slug": draft.slug or slugify(draft.name),
                "lastUpdated": self._timestamp(),
            }
            created = Product.model_validate(record)
            items.append(created.to_record())
            return items

        self.store.mutate(mutator)
        if created is None:
            raise StoreError("Product was not added")
        return created

    def update(
        self,
        product_id: str,
        updates: Mapping[str, Any] | BaseModel,
    ) -> Optional[Product]:
        """Merge ``updates`` onto the product with ``product_id``.

        Returns ``None`` without writing anything when no product matches.
        A supplied name regenerates the slug; otherwise the slug is kept.
        """

        target = str(product_id)
        changes = self._normalise_updates(updates)
        changes.pop("slug", None)
        updated: Optional[Product] = None

        def mutator(items: list[dict]) -> Optional[list[dict]]:
            nonlocal updated
            for index, current in enumerate(_parse(items)):
                if current.id != target:
                    continue
                record = current.to_record()
                merged = {
                    **record,
                    **changes,
                    "id": current.id,
                    "slug": slugify(changes["name"]) if changes.get("name") else current.slug,
                    "lastUpdated": self._timestamp(current.last_updated),
                }
                updated = Product.model_validate(merged)
                items[index] = updated.to_record()
                return items
            return None

        self.store.mutate(mutator)
        return updated
