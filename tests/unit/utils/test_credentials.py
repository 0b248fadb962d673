from lfx_make.services.credential.service import CredentialService
from lfx_make.utils.credentials import get_credential_data


async def test_empty_id_returns_empty_dict():
    assert await get_credential_data("") == {}
    assert await get_credential_data(None) == {}


async def test_reads_from_registered_service(credential_service):
    record = credential_service.add_credential("makeApi", {"makeZone": "us1"})

    assert await get_credential_data(record.id) == {"makeZone": "us1"}


async def test_context_service_takes_precedence(credential_service):
    other = CredentialService()
    record = other.add_credential("makeApi", {"makeZone": "eu1"})

    assert await get_credential_data(record.id, {"credential_service": other}) == {"makeZone": "eu1"}
    assert await get_credential_data(record.id) == {}
