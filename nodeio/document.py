"""
NodeDocument - A port graph together with its undo history and settings.

Example:
    doc = NodeDocument(ConfigManager("nodeio.json"))
    doc.graph.add_node(node)
    doc.undo.push(doc.graph.connect_command(out_port, in_port))
    doc.save("project.nodeio.json")

    restored = NodeDocument.load("project.nodeio.json")
"""
import json
import os
from typing import Any, Optional

from loguru import logger

from nodeio.core.commands import UndoManager
from nodeio.core.config import ConfigManager
from nodeio.nodegraph.context import TimelineContext
from nodeio.nodegraph.graph import PortGraph
from nodeio.nodegraph.serialization import GraphDocument, graph_from_document, graph_to_document


class NodeDocument:
    """
    Owns the graph, the undo journal and the configuration of one project.

    Attributes:
        config: Settings source
        timeline: Time context handed to restored nodes
        graph: The port graph
        undo: Journal every mutator pushes onto
    """

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        timeline: Optional[TimelineContext] = None,
        graph: Optional[PortGraph] = None,
    ):
        self.config = config or ConfigManager(filepath=None)
        self.timeline = timeline or TimelineContext()
        self.undo = UndoManager.from_config(self.config)
        self.graph = graph or PortGraph(
            enforce_types=self.config.data.graph.enforce_type_compatibility
        )
        self.config.on_changed.connect(self._on_config_changed)

    def _on_config_changed(self, section: str, key: str, value: Any) -> None:
        if (section, key) == ("graph", "enforce_type_compatibility"):
            self.graph.enforce_types = value

    def clear(self) -> None:
        """Remove every node and forget the undo history."""
        self.graph.clear()
        self.undo.clear()

    def save(self, path: str) -> None:
        """Write the graph as JSON. Undo history is not persisted."""
        document = graph_to_document(self.graph)
        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document.model_dump(mode="json"), f, indent=2)
        logger.info(f"Saved graph '{self.graph.name}' to {path}")

    @classmethod
    def load(
        cls,
        path: str,
        config: Optional[ConfigManager] = None,
        timeline: Optional[TimelineContext] = None,
    ) -> 'NodeDocument':
        """
        Read a document written by save().

        Raises:
            pydantic.ValidationError: If the file is not a valid document
        """
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        document = GraphDocument.model_validate(raw)

        config = config or ConfigManager(filepath=None)
        timeline = timeline or TimelineContext()
        graph = graph_from_document(
            document,
            timeline=timeline,
            enforce_types=config.data.graph.enforce_type_compatibility,
        )
        logger.info(f"Loaded graph '{graph.name}' from {path}")
        return cls(config=config, timeline=timeline, graph=graph)
