import logging
from typing import Optional

from ..common.crypto import EncryptionMethod
from ..common.errors import ConfigurationError, ProtocolError
from ..common.factory import MessageFactory
from ..common.log import Logger
from ..common.messages import AuthenticationMessage, Message, MessageKind, TextMessage
from ..common.protocol import Layer, Network, Participant
from .ui import View

logger = logging.getLogger(__name__)


class ChatClient(Participant):
    ''' Base chat client: talks to one server and shows incoming text on its view '''

    def __init__(self, factory: MessageFactory, network: Network, view: Optional[View] = None):
        super().__init__()
        self.factory = factory
        self.network = network
        self.view = view or View()
        self.server_address: Optional[int] = None   # learned from the first connection reply
        self.authenticated = False   # set by AuthenticatingClient when the server acknowledges us
        self.color_enabled = False   # switched on by ColoringClient

    def handle_message(self, message: Message) -> bool:
        kind = message.kind
        if kind is MessageKind.CONNECTION:
            if self.server_address is None:
                self.server_address = message.sender
            elif message.sender != self.server_address:
                logger.warning("client %d ignoring connection from %d, already bound to server %d",
                               self.address, message.sender, self.server_address)
            return True
        if kind is MessageKind.TEXT:
            if self.color_enabled and message.color is not None:
                self.view.print_message(message.sender, message.body, message.color)
            else:
                self.view.print_message(message.sender, message.body)
            return True
        if kind is MessageKind.AUTHENTICATION:
            raise ProtocolError(f"client {self.address} received an authentication message from {message.sender}")
        raise ProtocolError(f"unhandled message kind: {kind!r}")

    def connect(self, server: int) -> None:
        ''' Announce this client to the server at the given address '''
        self.network.send_message(server, self.factory.connection_message(self.address))

    def text_message(self, text: str, color: Optional[str] = None) -> Message:
        '''
        Build an outbound text message through the factory chain.
        Raises ConfigurationError if color is requested but not enabled.
        '''
        if color is None:
            return self.factory.text_message(self.address, text)
        if not self.color_enabled:
            raise ConfigurationError("colored messages need a ColoringClient")
        return self.factory.colored_text_message(self.address, text, color)

    def send(self, text: str, color: Optional[str] = None) -> None:
        self.send_to_server(self.text_message(text, color))

    def authenticate(self, username: str, password: str) -> None:
        if self.authenticated:
            return
        self.send_to_server(self.factory.authentication_message(self.address, username, password))

    def send_to_server(self, message: Message) -> None:
        if self.server_address is None:
            raise ProtocolError(f"client {self.address} is not connected to a server")
        self.network.send_message(self.server_address, message)


class ClientLayer(Layer):
    ''' Base for client feature layers; every client operation forwards to the inner client '''

    @property
    def view(self) -> View:
        return self.inner.view

    @property
    def factory(self) -> MessageFactory:
        return self.inner.factory

    @property
    def network(self) -> Network:
        return self.inner.network

    @property
    def server_address(self) -> Optional[int]:
        return self.inner.server_address

    @property
    def authenticated(self) -> bool:
        return self.inner.authenticated

    @authenticated.setter
    def authenticated(self, value: bool):
        self.inner.authenticated = value

    @property
    def color_enabled(self) -> bool:
        return self.inner.color_enabled

    @color_enabled.setter
    def color_enabled(self, value: bool):
        self.inner.color_enabled = value

    def connect(self, server: int) -> None:
        self.inner.connect(server)

    def text_message(self, text: str, color: Optional[str] = None) -> Message:
        return self.inner.text_message(text, color)

    def send(self, text: str, color: Optional[str] = None) -> None:
        self.inner.send(text, color)

    def authenticate(self, username: str, password: str) -> None:
        self.inner.authenticate(username, password)

    def send_to_server(self, message: Message) -> None:
        self.inner.send_to_server(message)


class LoggingClient(ClientLayer):

    def __init__(self, inner: Participant, log: Optional[Logger] = None):
        super().__init__(inner)
        self.logger = log or Logger("client")

    def handle_message(self, message: Message) -> bool:
        self.logger.log(f"Received message from sender {message.sender}")
        return self.inner.handle_message(message)

    def send(self, text: str, color: Optional[str] = None) -> None:
        # build once first so a rejected color request leaves no log entry
        self.text_message(text, color)
        self.logger.log(f"Sending message: {TextMessage(self.address, text, color)}")
        self.inner.send(text, color)

    def authenticate(self, username: str, password: str) -> None:
        pending = not self.authenticated
        self.inner.authenticate(username, password)
        # logged after the exchange so it follows any reply the server sent
        if pending:
            request = AuthenticationMessage(self.address, username, password)
            self.logger.log(f"Sending authentication request: {request}")


class EncryptingClient(ClientLayer):
    ''' Decrypts inbound messages; outbound encryption is done by the factory chain '''

    def __init__(self, inner: Participant, method: EncryptionMethod):
        super().__init__(inner)
        self.method = method

    def handle_message(self, message: Message) -> bool:
        return self.inner.handle_message(message.decrypt(self.method))


class AuthenticatingClient(ClientLayer):
    '''
    Marks the client authenticated when the server it connected to answers
    with an authentication message. Other authentication messages fall
    through to the base client, which rejects them.
    '''

    def handle_message(self, message: Message) -> bool:
        if message.kind is MessageKind.AUTHENTICATION and message.sender == self.server_address:
            self.authenticated = True
            return True
        return self.inner.handle_message(message)

    def authenticate(self, username: str, password: str) -> None:
        if self.authenticated:
            logger.debug("client %d already authenticated", self.address)
            return
        self.inner.authenticate(username, password)


class ColoringClient(ClientLayer):
    ''' Enables colored text on the base client; routing is unchanged '''

    def __init__(self, inner: Participant):
        super().__init__(inner)
        self.color_enabled = True
