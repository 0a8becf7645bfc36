'''
Server side of the chat: the base handler that connects clients and relays
text, plus the feature layers that can be stacked around it.

Layers are composed by nesting, outermost first, e.g.::

    LoggingServer(EncryptingServer(AuthenticatingServer(ChatServer(factory, net), users), ROT13))

Each layer sees messages in the form the layers outside it left them in.
'''
import logging
from typing import Mapping, Optional

from ..common.crypto import EncryptionMethod
from ..common.errors import ProtocolError
from ..common.factory import MessageFactory
from ..common.log import Logger
from ..common.messages import Message, MessageKind, TextMessage
from ..common.protocol import Layer, Network, Participant
from .state import AuthenticationState, CredentialStore

logger = logging.getLogger(__name__)

MUST_AUTHENTICATE = "You must authenticate before sending messages."
AUTH_FAILED = "Authentication failed."


class ChatServer(Participant):
    '''
    Base server: answers connections with its own address and relays every
    text message to all authenticated clients, the sender included.
    '''

    def __init__(self, factory: MessageFactory, network: Network):
        super().__init__()
        self.factory = factory
        self.network = network
        self.sessions = AuthenticationState()   # pending/authenticated addresses, audience for broadcasts

    def handle_message(self, message: Message) -> bool:
        kind = message.kind
        if kind is MessageKind.CONNECTION:
            return self.connect(message)
        if kind is MessageKind.TEXT:
            return self.broadcast(message)
        if kind is MessageKind.AUTHENTICATION:
            # only reaches here when no AuthenticatingServer sits in front
            raise ProtocolError(f"server {self.address} does not support authentication")
        raise ProtocolError(f"unhandled message kind: {kind!r}")

    def connect(self, message: Message) -> bool:
        # record the client, then announce our own address back to it
        self.sessions.connect(message.sender)
        self.reply(message.sender, self.factory.connection_message(self.address))
        return True

    def broadcast(self, message: TextMessage) -> bool:
        for rcpt in self.sessions.recipients():
            # rebuild per recipient so the factory chain re-applies its features
            if message.color is not None:
                out = self.factory.colored_text_message(message.sender, message.body, message.color)
            else:
                out = self.factory.text_message(message.sender, message.body)
            self.network.send_message(rcpt, out)
        return True

    def reply(self, receiver: int, message: Message) -> None:
        self.network.send_message(receiver, message)


class ServerLayer(Layer):
    ''' Base for server feature layers; exposes the base server's collaborators '''

    @property
    def factory(self) -> MessageFactory:
        return self.inner.factory

    @property
    def network(self) -> Network:
        return self.inner.network

    @property
    def sessions(self) -> AuthenticationState:
        return self.inner.sessions

    def reply(self, receiver: int, message: Message) -> None:
        self.inner.reply(receiver, message)


class LoggingServer(ServerLayer):
    ''' Writes one log line per inbound message describing what the inner layers did with it '''

    def __init__(self, inner: Participant, log: Optional[Logger] = None):
        super().__init__(inner)
        self.logger = log or Logger("server")

    def handle_message(self, message: Message) -> bool:
        ok = self.inner.handle_message(message)   # log the outcome, not the attempt
        sender = message.sender
        kind = message.kind
        if kind is MessageKind.CONNECTION:
            self.logger.log(f"New client: {sender}")
        elif kind is MessageKind.TEXT:
            if ok:
                self.logger.log(f"Broadcasting message from sender {sender}")
            else:
                self.logger.log(f"Rejected message from unauthenticated client: {sender}")
        elif kind is MessageKind.AUTHENTICATION:
            if ok:
                self.logger.log(f"Successfully authenticated client: {sender}")
            else:
                self.logger.log(f"Failed to authenticate client: {sender}")
        else:
            raise ProtocolError(f"unhandled message kind: {kind!r}")
        return ok


class EncryptingServer(ServerLayer):
    ''' Decrypts inbound messages; outbound encryption is done by the factory chain '''

    def __init__(self, inner: Participant, method: EncryptionMethod):
        super().__init__(inner)
        self.method = method

    def handle_message(self, message: Message) -> bool:
        # inner layers only ever see plaintext
        return self.inner.handle_message(message.decrypt(self.method))


class AuthenticatingServer(ServerLayer):
    '''
    Checks credentials and keeps unauthenticated clients from broadcasting.
    Authentication messages stop here; everything else is forwarded.
    '''

    def __init__(self, inner: Participant, credentials: Optional[Mapping[str, str]] = None):
        super().__init__(inner)
        self.credentials = CredentialStore(credentials)
        self.sessions.required = True   # new connections start out pending

    def handle_message(self, message: Message) -> bool:
        kind = message.kind
        if kind is MessageKind.AUTHENTICATION:
            return self.authenticate(message)   # terminal: never forwarded inward
        if kind is MessageKind.TEXT and not self.sessions.is_authenticated(message.sender):
            logger.info("rejecting text from unauthenticated client %d", message.sender)
            self.reply(message.sender, self.factory.text_message(self.address, MUST_AUTHENTICATE))
            return False
        return self.inner.handle_message(message)

    def authenticate(self, message) -> bool:
        if self.credentials.check(message.username, message.password):
            self.sessions.authenticate(message.sender)
            logger.info("client %d authenticated as %s", message.sender, message.username)
            # the acknowledgement carries no credentials
            self.reply(message.sender, self.factory.authentication_message(self.address, "", ""))
            return True
        logger.info("client %d failed to authenticate", message.sender)
        self.reply(message.sender, self.factory.text_message(self.address, AUTH_FAILED))
        return False
