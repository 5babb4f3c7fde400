"""
srvkit – service scaffold: resource lifecycle, MongoDB data access, users.

Import path convention::

    from srvkit.kernel.errors import NotFoundError
    from srvkit.resources import Resources, init_resources, close_resources
    from srvkit.adapters.mongodb import MongoRepository, Document
    from srvkit.application.users import UserService
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
