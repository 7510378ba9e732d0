"""CRUD operations for integration auths."""

from vaultsync.crud._base import CRUDBase
from vaultsync.models.integration_auth import IntegrationAuth
from vaultsync.schemas.integration_auth import IntegrationAuthCreate


class CRUDIntegrationAuth(CRUDBase[IntegrationAuth, IntegrationAuthCreate, IntegrationAuthCreate]):
    """CRUD operations for integration auths."""


integration_auth = CRUDIntegrationAuth(IntegrationAuth)
