"""HTML screen adapters (pure functions over markup; file reads only in `document_from_file`)."""

from .document import document_from_file, document_from_html, resolve_geometry
from .navigation import navigation_edges, navigation_graph_from_documents, screen_id_from_target

__all__ = [
    "document_from_file",
    "document_from_html",
    "resolve_geometry",
    "navigation_edges",
    "navigation_graph_from_documents",
    "screen_id_from_target",
]
