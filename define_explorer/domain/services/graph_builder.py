from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..entities import GraphData, GraphLink, GraphNode

if TYPE_CHECKING:
    from ..entities import ParsedDefineXML

ITEM_GROUP_NODE = 1
ITEM_DEF_NODE = 2
METHOD_NODE = 3
COMMENT_NODE = 4
CODE_LIST_NODE = 5

COMMENT_OID = "CommentOID"
CODE_LIST_OID = "CodeListOID"
METHOD_OID = "MethodOID"
ITEM_OID = "ItemOID"


class _GraphAccumulator:
    def __init__(self) -> None:
        super().__init__()
        self.nodes: dict[str, GraphNode] = {}
        self.links: list[GraphLink] = []

    def add_node(self, oid: str | None, group: int = ITEM_GROUP_NODE) -> None:
        if oid and oid not in self.nodes:
            self.nodes[oid] = GraphNode(id=oid, group=group, label=oid)

    def add_nodes(self, oids: Iterable[str | None], group: int) -> None:
        for oid in oids:
            self.add_node(oid, group)

    def add_link(self, source: str | None, target: str | None, relationship: str) -> None:
        if not source or not target:
            return
        self.add_node(source)
        self.add_node(target)
        self.links.append(
            GraphLink(source=source, target=target, value=1, relationship=relationship)
        )

    def build(self) -> GraphData:
        return GraphData(nodes=list(self.nodes.values()), links=self.links)


def build_relationship_graph(document: ParsedDefineXML) -> GraphData:
    """Node/edge view of the OID cross-references in a parsed document.

    Nodes are keyed by OID and edges are labelled with the referencing
    attribute name. A referenced OID with no entity of its own still gets a
    node.
    """
    graph = _GraphAccumulator()
    graph.add_nodes((group.oid for group in document.item_groups), ITEM_GROUP_NODE)
    graph.add_nodes((item.oid for item in document.item_defs), ITEM_DEF_NODE)
    graph.add_nodes((method.oid for method in document.methods), METHOD_NODE)
    graph.add_nodes((comment.oid for comment in document.comments), COMMENT_NODE)
    graph.add_nodes((cl.oid for cl in document.code_lists), CODE_LIST_NODE)

    for standard in document.standards:
        graph.add_link(standard.oid, standard.comment_oid, COMMENT_OID)
    for group in document.item_groups:
        graph.add_link(group.oid, group.comment_oid, COMMENT_OID)
    for item in document.item_defs:
        graph.add_link(item.oid, item.code_list_oid, CODE_LIST_OID)
    for ref in document.item_refs:
        graph.add_link(ref.oid, ref.method_oid, METHOD_OID)
    for value_list_def in document.value_list_defs:
        for ref in value_list_def.item_refs:
            graph.add_link(value_list_def.oid, ref.oid, ITEM_OID)
            graph.add_link(value_list_def.oid, ref.method_oid, METHOD_OID)
    for where_clause in document.where_clause_defs:
        for check in where_clause.range_checks:
            graph.add_link(where_clause.oid, check.item_oid, ITEM_OID)
    return graph.build()
