import pytest
from pydantic import ValidationError

from lfx_make.inputs import AsyncMultiOptionsInput, CredentialInput, OptionsInput, PasswordInput
from lfx_make.schema.node import NodeOptionsValue


def test_password_input_serializes_with_host_keys():
    field = PasswordInput(name="mcpToken", label="Token", placeholder="Paste token", additional_params=True)

    assert field.to_dict() == {
        "type": "password",
        "name": "mcpToken",
        "label": "Token",
        "placeholder": "Paste token",
        "optional": False,
        "additionalParams": True,
        "_input_type": "PasswordInput",
    }


def test_password_input_rejects_default():
    with pytest.raises(ValidationError):
        PasswordInput(name="token", default="secret")


def test_options_input_default_must_be_an_option():
    options = [NodeOptionsValue(label="US1", name="us1"), NodeOptionsValue(label="EU1", name="eu1")]

    assert OptionsInput(name="zone", options=options, default="eu1").option_names() == ["us1", "eu1"]
    with pytest.raises(ValidationError):
        OptionsInput(name="zone", options=options, default="xx1")


def test_credential_input_uses_alias():
    field = CredentialInput(name="credential", credentialNames=["makeApi"])

    assert field.credential_names == ["makeApi"]
    assert field.to_dict()["credentialNames"] == ["makeApi"]


def test_async_multi_options_input_defaults():
    field = AsyncMultiOptionsInput(name="actions", load_method="list_actions", default=["a"])

    assert field.to_dict()["loadMethod"] == "list_actions"
    assert field.to_dict()["refresh"] is False
    with pytest.raises(ValidationError):
        AsyncMultiOptionsInput(name="actions", load_method="list_actions", default="a")
    with pytest.raises(ValidationError):
        AsyncMultiOptionsInput(name="actions", load_method="list_actions", default=["a", 1])


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        PasswordInput(name="x", unexpected=True)
