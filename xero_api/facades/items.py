"""
Items (products and services).

Reference: https://developer.xero.com/documentation/api/accounting/items
"""
from __future__ import annotations
from typing import Optional, Union

from ..models import Item, PurchaseAndSaleDetails
from ..precision import Number, is_high_precision
from ..query import Query, QueryMap
from .base import Facade, RecordId, require_id, require_positive, require_text


class ItemFacade(Facade[Item]):
    resource = "Items"
    model = Item
    label = "item"

    def create(self, code: str, name: str, description: str, unit_price: Number) -> Item:
        item = self._build(code, name, description, unit_price)
        self._client.take()
        return self._single(self._create([item], self._precision_params(unit_price)))

    def update(
        self,
        item_id: RecordId,
        code: str,
        name: str,
        description: str,
        unit_price: Number,
    ) -> Item:
        parsed = require_id(item_id, "invalid item id")
        item = self._build(code, name, description, unit_price)
        item.item_id = str(parsed)
        self._client.take()
        return self._single(self._update([item], self._precision_params(unit_price)))

    def get(self, item_id: RecordId) -> Item:
        return self._get(item_id, unit_dp=4)

    def list(self, page: int = 1, query: Union[Query, QueryMap, None] = None) -> list[Item]:
        """List items, up to 100 per page. Unit prices always come back with 4 decimal places."""
        q = self._query(query).with_overrides(page=page, unit_dp=4)
        self._client.take()
        return self._find(q)

    def _build(self, code: str, name: str, description: str, unit_price: Number) -> Item:
        require_text(code, "item code cannot be blank")
        require_text(name, "item name cannot be blank")
        require_text(description, "item description cannot be blank")
        require_positive(unit_price, "unit price must be above 0")
        return Item(
            code=code,
            name=name,
            description=description,
            sales_details=PurchaseAndSaleDetails(unit_price=float(unit_price)),
        )

    @staticmethod
    def _precision_params(unit_price: Number) -> Optional[dict[str, str]]:
        # Xero rounds to 2dp unless asked for 4
        if is_high_precision(unit_price):
            return {"unitdp": "4"}
        return None
