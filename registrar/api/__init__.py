"""
API module: administrative facade and REST API.
"""

from .admin_facade import AdminFacade, OperationResult
from .rest_api import RegistrarRestAPI

__all__ = [
    "AdminFacade",
    "OperationResult",
    "RegistrarRestAPI",
]
