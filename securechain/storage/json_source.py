"""
JSON file graph source.

Expects a document of the form ``{"nodes": [...], "edges": [...]}`` with
records shaped like the Node and Edge models.
"""

import json
from pathlib import Path
from typing import Union

import structlog
from pydantic import ValidationError

from securechain.models.graph import GraphData

from .base import GraphSource, GraphSourceError

logger = structlog.get_logger(__name__)


class JsonGraphSource(GraphSource):
    """
    Loads and validates a graph from a JSON file on every ``load`` call.

    Attributes:
        path: Location of the JSON document
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> GraphData:
        """
        Read, parse and validate the graph file.

        Raises:
            GraphSourceError: If the file is missing or unreadable, is not
                UTF-8 JSON, or does not describe a valid graph
        """
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            logger.error("graph_file_missing", path=str(self.path))
            raise GraphSourceError(f"Graph file not found: {self.path}") from e
        except OSError as e:
            logger.error("graph_file_unreadable", path=str(self.path), error=str(e))
            raise GraphSourceError(f"Graph file could not be read: {self.path}") from e
        except UnicodeDecodeError as e:
            logger.error("graph_file_invalid_encoding", path=str(self.path), error=str(e))
            raise GraphSourceError(f"Graph file is not valid UTF-8: {self.path}") from e
        except json.JSONDecodeError as e:
            logger.error("graph_file_invalid_json", path=str(self.path), error=str(e))
            raise GraphSourceError(f"Graph file is not valid JSON: {self.path}") from e

        try:
            graph = GraphData.model_validate(raw)
        except ValidationError as e:
            logger.error(
                "graph_file_validation_failed",
                path=str(self.path),
                errors=e.error_count(),
            )
            raise GraphSourceError(f"Graph file failed validation: {e}") from e

        logger.info(
            "graph_source_loaded",
            source="json",
            path=str(self.path),
            nodes=len(graph.nodes),
            edges=len(graph.edges),
        )
        return graph
