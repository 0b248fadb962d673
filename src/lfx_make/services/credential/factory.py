"""凭据服务工厂。"""

from lfx_make.services.credential.service import CredentialService
from lfx_make.services.factory import ServiceFactory


class CredentialServiceFactory(ServiceFactory[CredentialService]):
    def __init__(self) -> None:
        super().__init__(CredentialService)
