"""Resources – external dependencies and their process-wide lifecycle."""
from srvkit.kernel.errors import ResourceInitializationError, ResourceNotConnectedError
from srvkit.resources.lifecycle import Resources, close_resources, init_resources
from srvkit.resources.port import Resource

__all__ = [
    "Resource",
    "ResourceInitializationError",
    "ResourceNotConnectedError",
    "Resources",
    "close_resources",
    "init_resources",
]
