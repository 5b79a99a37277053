from .collection_store import CollectionState, CollectionStore
from .form_controller import FormController
from .sync_orchestrator import SyncOrchestrator

__all__ = [
    "CollectionState",
    "CollectionStore",
    "FormController",
    "SyncOrchestrator",
]
