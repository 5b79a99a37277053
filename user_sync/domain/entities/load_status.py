"""Domain entity for the loading state of one remote collection."""

from dataclasses import dataclass
from enum import Enum


class LoadState(str, Enum):
    """Lifecycle states of a collection load."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadStatus:
    """Load state and, when failed, the message describing why."""

    state: LoadState = LoadState.LOADING
    error: str | None = None

    @classmethod
    def loading(cls) -> "LoadStatus":
        return cls(LoadState.LOADING)

    @classmethod
    def ready(cls) -> "LoadStatus":
        return cls(LoadState.READY)

    @classmethod
    def failed(cls, message: str) -> "LoadStatus":
        return cls(LoadState.FAILED, message)

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    def __str__(self) -> str:
        if self.error:
            return f"{self.state.value}: {self.error}"
        return self.state.value
