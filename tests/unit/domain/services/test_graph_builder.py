from define_explorer.domain.entities import (
    ItemDef,
    ItemGroup,
    MetaDataVersion,
    ParsedDefineXML,
    Standard,
    Study,
)
from define_explorer.domain.services.graph_builder import (
    CODE_LIST_NODE,
    COMMENT_NODE,
    ITEM_DEF_NODE,
    ITEM_GROUP_NODE,
    METHOD_NODE,
    build_relationship_graph,
)


def _links(graph):
    return {(link.source, link.target, link.relationship) for link in graph.links}


class TestSampleGraph:
    def test_node_and_link_counts(self, parsed_define):
        graph = build_relationship_graph(parsed_define)
        assert len(graph.nodes) == 28
        assert len(graph.links) == 15

    def test_node_ids_are_unique(self, parsed_define):
        ids = [node.id for node in build_relationship_graph(parsed_define).nodes]
        assert len(ids) == len(set(ids))

    def test_nodes_grouped_by_entity_kind(self, parsed_define):
        groups = {node.id: node.group for node in build_relationship_graph(parsed_define).nodes}
        assert groups["IG.ADLB"] == ITEM_GROUP_NODE
        assert groups["IT.ADLB.AVAL"] == ITEM_DEF_NODE
        assert groups["MT.ADLB.AVAL"] == METHOD_NODE
        assert groups["COM.ADLB"] == COMMENT_NODE
        assert groups["CL.PARAMCD"] == CODE_LIST_NODE
        # Referenced-only OIDs fall back to the default group.
        assert groups["MT.ADLB.AVALC"] == ITEM_GROUP_NODE
        assert groups["VL.ADLB.AVAL"] == ITEM_GROUP_NODE

    def test_cross_reference_links(self, parsed_define):
        links = _links(build_relationship_graph(parsed_define))
        assert ("IG.ADLB", "COM.ADLB", "CommentOID") in links
        assert ("IT.ADLB.PARAMCD", "CL.PARAMCD", "CodeListOID") in links
        assert ("IT.ADLB.AVAL", "MT.ADLB.AVAL", "MethodOID") in links
        assert ("VL.ADLB.AVAL", "IT.ADLB.AVAL.HGB", "ItemOID") in links
        assert ("VL.ADLB.AVALC", "MT.ADLB.AVALC", "MethodOID") in links
        assert ("WC.ADLB.PARAMCD.EQ.ALT", "IT.ADLB.PARAMCD", "ItemOID") in links

    def test_links_are_unweighted(self, parsed_define):
        graph = build_relationship_graph(parsed_define)
        assert {link.value for link in graph.links} == {1}


def test_missing_targets_create_no_link():
    document = ParsedDefineXML(
        study=Study(),
        metadata=MetaDataVersion(),
        standards=(Standard(oid="STD.1", comment_oid="COM.STD"),),
        item_groups=(ItemGroup(oid="IG.A"),),
        item_defs=(ItemDef(oid="IT.A.X"), ItemDef(oid=None, code_list_oid="CL.X")),
    )
    graph = build_relationship_graph(document)
    assert [node.id for node in graph.nodes] == ["IG.A", "IT.A.X", "STD.1", "COM.STD"]
    assert _links(graph) == {("STD.1", "COM.STD", "CommentOID")}


def test_to_dict_shape(parsed_define):
    payload = build_relationship_graph(parsed_define).to_dict()
    assert set(payload) == {"nodes", "links"}
    assert payload["nodes"][0] == {"id": "IG.ADSL", "group": 1, "label": "IG.ADSL"}
    assert set(payload["links"][0]) == {"source", "target", "value", "relationship"}


def test_code_list_reference_is_a_single_edge():
    from define_explorer.domain.entities import CodeList

    document = ParsedDefineXML(
        study=Study(),
        metadata=MetaDataVersion(),
        item_defs=(ItemDef(oid="IT.TEST", code_list_oid="CL.TEST"),),
        code_lists=(CodeList(oid="CL.TEST"),),
    )
    graph = build_relationship_graph(document)
    assert [node.id for node in graph.nodes] == ["IT.TEST", "CL.TEST"]
    assert _links(graph) == {("IT.TEST", "CL.TEST", "CodeListOID")}
    assert len(graph.links) == 1
