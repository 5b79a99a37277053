from .resource_client import ResourceClient

__all__ = [
    "ResourceClient",
]
