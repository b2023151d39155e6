"""Editor package containing buffer snapshots and selection context helpers."""

from . import context, document_model, selection_gateway

__all__ = ["context", "document_model", "selection_gateway"]
