from .http_resource_client import HttpResourceClient, ResourceSource

__all__ = ["HttpResourceClient", "ResourceSource"]
