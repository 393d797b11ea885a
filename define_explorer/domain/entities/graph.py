from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class GraphNode:
    id: str
    group: int = 1
    label: str = ""


@dataclass(frozen=True, slots=True)
class GraphLink:
    source: str
    target: str
    value: int
    relationship: str


@dataclass(slots=True)
class GraphData:
    nodes: list[GraphNode] = field(default_factory=list)
    links: list[GraphLink] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[dict[str, object]]]:
        return {
            "nodes": [
                {"id": node.id, "group": node.group, "label": node.label}
                for node in self.nodes
            ],
            "links": [
                {
                    "source": link.source,
                    "target": link.target,
                    "value": link.value,
                    "relationship": link.relationship,
                }
                for link in self.links
            ],
        }
