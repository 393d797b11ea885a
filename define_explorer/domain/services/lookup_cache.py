from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import (
        CodeList,
        Comment,
        ItemDef,
        Method,
        ParsedDefineXML,
        WhereClauseDef,
    )


class OIDIndex[T]:
    """First-wins map of OID to entity. Entities without an OID are not indexed."""

    def __init__(self, entities: Iterable[T], key: Callable[[T], str | None]) -> None:
        super().__init__()
        self._store: dict[str, T] = {}
        for entity in entities:
            oid = key(entity)
            if oid and oid not in self._store:
                self._store[oid] = entity

    def get(self, oid: str | None) -> T | None:
        if not oid:
            return None
        return self._store.get(oid)

    def size(self) -> int:
        return len(self._store)

    def keys(self) -> list[str]:
        return list(self._store.keys())


class OIDLookupCache:
    """Per-document OID lookups, rebuilt wholesale when the document changes."""

    def __init__(self) -> None:
        super().__init__()
        self._document: ParsedDefineXML | None = None
        self._item_defs: OIDIndex[ItemDef] | None = None
        self._code_lists: OIDIndex[CodeList] | None = None
        self._methods: OIDIndex[Method] | None = None
        self._comments: OIDIndex[Comment] | None = None
        self._where_clauses: OIDIndex[WhereClauseDef] | None = None

    def bind(self, document: ParsedDefineXML) -> None:
        if document is not self._document:
            self.clear()
            self._document = document

    def clear(self) -> None:
        self._document = None
        self._item_defs = None
        self._code_lists = None
        self._methods = None
        self._comments = None
        self._where_clauses = None

    @property
    def is_bound(self) -> bool:
        return self._document is not None

    def item_def(self, oid: str | None) -> ItemDef | None:
        if self._item_defs is None:
            self._item_defs = OIDIndex(self._bound().item_defs, lambda e: e.oid)
        return self._item_defs.get(oid)

    def code_list(self, oid: str | None) -> CodeList | None:
        if self._code_lists is None:
            self._code_lists = OIDIndex(self._bound().code_lists, lambda e: e.oid)
        return self._code_lists.get(oid)

    def method(self, oid: str | None) -> Method | None:
        if self._methods is None:
            self._methods = OIDIndex(self._bound().methods, lambda e: e.oid)
        return self._methods.get(oid)

    def comment(self, oid: str | None) -> Comment | None:
        if self._comments is None:
            self._comments = OIDIndex(self._bound().comments, lambda e: e.oid)
        return self._comments.get(oid)

    def where_clause(self, oid: str | None) -> WhereClauseDef | None:
        if self._where_clauses is None:
            self._where_clauses = OIDIndex(
                self._bound().where_clause_defs, lambda e: e.oid
            )
        return self._where_clauses.get(oid)

    def _bound(self) -> ParsedDefineXML:
        if self._document is None:
            raise RuntimeError("OIDLookupCache used before bind()")
        return self._document
