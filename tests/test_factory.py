import pytest

from featurechat.common.crypto import REVERSE, ROT13
from featurechat.common.errors import ConfigurationError
from featurechat.common.factory import (AuthenticatingMessageFactory, BaseMessageFactory,
                                        ColoringMessageFactory, EncryptingMessageFactory)
from featurechat.common.messages import AuthenticationMessage, ConnectionMessage, TextMessage

RED = "\u001b[31m"


def test_base_factory_builds_plain_messages() -> None:
    factory = BaseMessageFactory()

    assert factory.connection_message(1) == ConnectionMessage(1)
    assert factory.text_message(1, "hi") == TextMessage(1, "hi")


def test_base_factory_rejects_optional_operations() -> None:
    factory = BaseMessageFactory()

    with pytest.raises(ConfigurationError):
        factory.colored_text_message(1, "hi", RED)
    with pytest.raises(ConfigurationError):
        factory.authentication_message(1, "u", "p")


def test_coloring_factory_enables_colored_text_only() -> None:
    factory = ColoringMessageFactory(BaseMessageFactory())

    assert factory.colored_text_message(1, "hi", RED) == TextMessage(1, "hi", RED)
    assert factory.text_message(1, "hi") == TextMessage(1, "hi")
    with pytest.raises(ConfigurationError):
        factory.authentication_message(1, "u", "p")


def test_authenticating_factory_enables_authentication_only() -> None:
    factory = AuthenticatingMessageFactory(BaseMessageFactory())

    assert factory.authentication_message(1, "u", "p") == AuthenticationMessage(1, "u", "p")
    with pytest.raises(ConfigurationError):
        factory.colored_text_message(1, "hi", RED)


def test_encrypting_factory_encrypts_every_built_message() -> None:
    factory = EncryptingMessageFactory(
        AuthenticatingMessageFactory(ColoringMessageFactory(BaseMessageFactory())), ROT13)

    assert factory.connection_message(2) == ConnectionMessage(2)
    assert factory.text_message(2, "Hello") == TextMessage(2, "Uryyb")
    assert factory.colored_text_message(2, "Hello", RED) == TextMessage(2, "Uryyb", RED)
    assert factory.authentication_message(2, "user", "pw") == AuthenticationMessage(2, "hfre", "cj")


def test_encrypting_factory_propagates_configuration_errors() -> None:
    factory = EncryptingMessageFactory(BaseMessageFactory(), REVERSE)

    with pytest.raises(ConfigurationError):
        factory.colored_text_message(1, "hi", RED)


def test_layer_order_does_not_matter_for_enabling() -> None:
    factory = ColoringMessageFactory(AuthenticatingMessageFactory(BaseMessageFactory()))

    assert factory.authentication_message(1, "u", "p") == AuthenticationMessage(1, "u", "p")
    assert factory.colored_text_message(1, "hi", RED) == TextMessage(1, "hi", RED)
