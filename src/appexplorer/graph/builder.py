from typing import Iterable, List, Tuple

import networkx as nx

from appexplorer.spec import DefinedComponent, ScanReport


class GraphBuilder:
    def build_component_graph(self, reports: Iterable[ScanReport]) -> nx.DiGraph:
        """
        Builds a component reference graph from one or more scan reports.

        Nodes: Component identities (str), carrying `name`, `location`,
            `defined` and `exported` attributes.
        Edges: Represent "renders" from a defined component to a referenced one.
        """
        graph = nx.DiGraph()

        # 1. Add every component record as a node; definitions win over references
        for report in reports:
            exports = set(report.exports)
            for node_id, record in report.components.items():
                if isinstance(record, DefinedComponent):
                    graph.add_node(
                        node_id,
                        name=record.name,
                        location=record.location,
                        defined=True,
                        exported=node_id in exports,
                    )
                elif not graph.nodes.get(node_id, {}).get("defined"):
                    graph.add_node(
                        node_id,
                        name=record.name,
                        location=record.definition_location,
                        defined=False,
                        exported=False,
                    )

            # 2. Add edges for each defined component's references
            for node_id, record in report.defined_components().items():
                for target in record.referenced_components:
                    if target != node_id:
                        graph.add_edge(node_id, target)

        return graph

    def edges(self, graph: nx.DiGraph) -> List[Tuple[str, str]]:
        return sorted(graph.edges)
