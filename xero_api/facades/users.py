from __future__ import annotations
from typing import Union

from ..models import User
from ..query import Query, QueryMap
from .base import Facade


class UserFacade(Facade[User]):
    """Organisation users; read only."""

    resource = "Users"
    model = User
    label = "user"

    def list(self, query: Union[Query, QueryMap, None] = None) -> list[User]:
        q = self._query(query)
        self._client.take()
        return self._find(q)
