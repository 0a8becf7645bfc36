"""
Runtime feature selection.

A ChatConfig names the optional layers that are switched on; the build_*
helpers nest the matching layers in a fixed order so every configuration
shares the same core handlers.
"""
from dataclasses import dataclass
from typing import Mapping, Optional

from .client.net import (AuthenticatingClient, ChatClient, ColoringClient,
                         EncryptingClient, LoggingClient)
from .common.crypto import EncryptionMethod, method_by_name
from .common.factory import (AuthenticatingMessageFactory, BaseMessageFactory,
                             ColoringMessageFactory, EncryptingMessageFactory,
                             MessageFactory)
from .common.protocol import Network, Participant
from .server.handler import (AuthenticatingServer, ChatServer, EncryptingServer,
                             LoggingServer)


@dataclass(frozen=True)
class ChatConfig:
    authentication: bool = False
    color: bool = False
    encryption: Optional[EncryptionMethod] = None
    logging: bool = False

    @classmethod
    def from_args(cls, args) -> "ChatConfig":
        ''' Build a configuration from parsed command-line arguments '''
        encryption = method_by_name(args.encryption) if args.encryption else None
        return cls(authentication=args.authentication, color=args.color,
                   encryption=encryption, logging=args.logging)


def build_factory(config: ChatConfig) -> MessageFactory:
    factory: MessageFactory = BaseMessageFactory()
    if config.color:
        factory = ColoringMessageFactory(factory)
    if config.authentication:
        factory = AuthenticatingMessageFactory(factory)
    if config.encryption is not None:
        factory = EncryptingMessageFactory(factory, config.encryption)
    return factory


def build_server(config: ChatConfig, network: Network,
                 credentials: Optional[Mapping[str, str]] = None,
                 factory: Optional[MessageFactory] = None) -> Participant:
    '''
    This function assembles a server stack for the given configuration.
    Input:
        - config: active features
        - network: the network the server will be registered on
        - credentials: username -> password, only used with authentication
        - factory: shared message factory (built from config if omitted)
    Output: the outermost server layer (not yet registered)
    '''
    server: Participant = ChatServer(factory or build_factory(config), network)
    if config.authentication:
        server = AuthenticatingServer(server, credentials)
    if config.encryption is not None:
        server = EncryptingServer(server, config.encryption)
    if config.logging:
        server = LoggingServer(server)
    return server


def build_client(config: ChatConfig, network: Network,
                 factory: Optional[MessageFactory] = None) -> Participant:
    ''' Assemble a client stack for the given configuration (not yet registered) '''
    client: Participant = ChatClient(factory or build_factory(config), network)
    if config.color:
        client = ColoringClient(client)
    if config.authentication:
        client = AuthenticatingClient(client)
    if config.encryption is not None:
        client = EncryptingClient(client, config.encryption)
    if config.logging:
        client = LoggingClient(client)
    return client
