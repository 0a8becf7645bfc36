import argparse

import pytest

from featurechat.client.net import (AuthenticatingClient, ChatClient, ColoringClient,
                                    EncryptingClient, LoggingClient)
from featurechat.client.ui import GREEN, RED, RESET, YELLOW
from featurechat.common.crypto import REVERSE, ROT13
from featurechat.common.errors import ConfigurationError
from featurechat.common.factory import (AuthenticatingMessageFactory, BaseMessageFactory,
                                        ColoringMessageFactory, EncryptingMessageFactory)
from featurechat.common.protocol import Network
from featurechat.config import ChatConfig, build_client, build_factory, build_server
from featurechat.server.handler import (AuthenticatingServer, ChatServer, EncryptingServer,
                                        LoggingServer)

ALL = ChatConfig(authentication=True, color=True, encryption=REVERSE, logging=True)


def make_chat(config, credentials=None, clients=1):
    network = Network()
    factory = build_factory(config)
    server = build_server(config, network, credentials, factory=factory)
    network.register(server)
    out = []
    for _ in range(clients):
        client = build_client(config, network, factory=factory)
        network.register(client)
        out.append(client)
    return server, out


def last(client) -> str:
    return client.view.last_displayed_message


def test_default_config_builds_bare_stacks() -> None:
    config = ChatConfig()
    network = Network()

    assert type(build_factory(config)) is BaseMessageFactory
    assert type(build_server(config, network)) is ChatServer
    assert type(build_client(config, network)) is ChatClient


def test_all_features_nest_in_canonical_order() -> None:
    network = Network()
    factory = build_factory(ALL)
    server = build_server(ALL, network, {}, factory=factory)
    client = build_client(ALL, network, factory=factory)

    assert isinstance(factory, EncryptingMessageFactory)
    assert isinstance(factory.inner, AuthenticatingMessageFactory)
    assert isinstance(factory.inner.inner, ColoringMessageFactory)
    assert isinstance(factory.inner.inner.inner, BaseMessageFactory)

    assert isinstance(server, LoggingServer)
    assert isinstance(server.inner, EncryptingServer)
    assert isinstance(server.inner.inner, AuthenticatingServer)
    assert isinstance(server.inner.inner.inner, ChatServer)

    assert isinstance(client, LoggingClient)
    assert isinstance(client.inner, EncryptingClient)
    assert isinstance(client.inner.inner, AuthenticatingClient)
    assert isinstance(client.inner.inner.inner, ColoringClient)
    assert isinstance(client.inner.inner.inner.inner, ChatClient)


def test_from_args() -> None:
    args = argparse.Namespace(authentication=True, color=False, encryption="rot13", logging=True)

    assert ChatConfig.from_args(args) == ChatConfig(True, False, ROT13, True)


def test_from_args_without_encryption() -> None:
    args = argparse.Namespace(authentication=False, color=True, encryption=None, logging=False)

    assert ChatConfig.from_args(args).encryption is None


def test_from_args_rejects_unknown_encryption() -> None:
    args = argparse.Namespace(authentication=False, color=False, encryption="xor", logging=False)

    with pytest.raises(ConfigurationError):
        ChatConfig.from_args(args)


def test_default_config_relays_messages() -> None:
    server, (client1, client2) = make_chat(ChatConfig(), clients=2)

    client1.connect(server.address)
    client2.connect(server.address)
    client1.send("HelloWorld!")

    assert last(client1) == f"[{client1.address}] HelloWorld!"
    assert last(client2) == f"[{client1.address}] HelloWorld!"


def test_default_config_has_no_color() -> None:
    server, (client,) = make_chat(ChatConfig())
    client.connect(server.address)

    with pytest.raises(ConfigurationError):
        client.send("HelloWorld!", RED)


def test_default_config_has_no_authentication() -> None:
    server, (client,) = make_chat(ChatConfig())
    client.connect(server.address)

    with pytest.raises(ConfigurationError):
        client.authenticate("user", "pw")


def test_color_config() -> None:
    server, (client,) = make_chat(ChatConfig(color=True))
    client.connect(server.address)

    client.send("HelloWorld!", RED)

    assert last(client) == f"{RESET}{RED}[{client.address}] HelloWorld!{RESET}"


@pytest.mark.parametrize("method", [ROT13, REVERSE])
def test_encryption_config(method) -> None:
    server, (client,) = make_chat(ChatConfig(encryption=method))
    client.connect(server.address)

    client.send("HelloWorld!")

    assert last(client) == f"[{client.address}] HelloWorld!"


def test_encryption_with_authentication_and_color() -> None:
    config = ChatConfig(authentication=True, color=True, encryption=ROT13)
    server, (client,) = make_chat(config, {"user": "CorrectHorseBatteryStaple"})
    client.connect(server.address)

    client.authenticate("user", "CorrectHorseBatteryStaple")
    client.send("HelloWorld!", GREEN)

    assert last(client) == f"{RESET}{GREEN}[{client.address}] HelloWorld!{RESET}"


def test_authentication_config_rejects_until_authenticated() -> None:
    server, (client1, client2) = make_chat(ChatConfig(authentication=True), {"user2": "securePassword"}, clients=2)
    client1.connect(server.address)
    client2.connect(server.address)

    client1.send("HelloWorld!")
    assert last(client1) == f"[{server.address}] You must authenticate before sending messages."

    client1.authenticate("user2", "securePassword")
    assert client1.authenticated
    assert not client2.authenticated
    client1.send("HelloWorld!")
    assert last(client1) == f"[{client1.address}] HelloWorld!"
    assert last(client2) == ""


def test_all_features_config() -> None:
    server, (client,) = make_chat(ALL, {"user2": "securePassword"})

    client.connect(server.address)
    assert server.logger.last_logged_message == f"New client: {client.address}"

    client.send("Hello world!")
    assert server.logger.last_logged_message == f"Rejected message from unauthenticated client: {client.address}"
    assert last(client) == f"[{server.address}] You must authenticate before sending messages."

    client.authenticate("user1", "password")
    assert server.logger.last_logged_message == f"Failed to authenticate client: {client.address}"
    assert last(client) == f"[{server.address}] Authentication failed."

    assert not client.authenticated
    client.authenticate("user2", "securePassword")
    assert client.logger.last_logged_message == \
        f"Sending authentication request: [{client.address}] u=user2 p=securePassword"
    assert server.logger.last_logged_message == f"Successfully authenticated client: {client.address}"
    assert client.authenticated

    client.send("Hello world!", YELLOW)
    assert server.logger.last_logged_message == f"Broadcasting message from sender {client.address}"
    assert client.logger.last_logged_message == f"Received message from sender {client.address}"
    assert last(client) == f"{RESET}{YELLOW}[{client.address}] Hello world!{RESET}"
