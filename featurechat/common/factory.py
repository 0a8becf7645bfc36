'''
Outbound message construction.

Every message a participant sends is built by a factory chain, so features
such as encryption are baked in before the message reaches the network.
Optional operations (colored text, authentication) only exist when the
matching layer is part of the chain.
'''
from .crypto import EncryptionMethod
from .errors import ConfigurationError
from .messages import AuthenticationMessage, ConnectionMessage, Message, TextMessage


class MessageFactory:
    '''Interface shared by the base factory and all factory layers.'''

    def connection_message(self, sender: int) -> Message:
        raise NotImplementedError

    def text_message(self, sender: int, body: str) -> Message:
        raise NotImplementedError

    def colored_text_message(self, sender: int, body: str, color: str) -> Message:
        raise NotImplementedError

    def authentication_message(self, sender: int, username: str, password: str) -> Message:
        raise NotImplementedError


class BaseMessageFactory(MessageFactory):
    '''Builds plain messages; colored text and authentication are unsupported here.'''

    def connection_message(self, sender: int) -> Message:
        return ConnectionMessage(sender)

    def text_message(self, sender: int, body: str) -> Message:
        return TextMessage(sender, body)

    # the two optional operations fail until a layer above enables them
    def colored_text_message(self, sender: int, body: str, color: str) -> Message:
        raise ConfigurationError("colored messages need a ColoringMessageFactory")

    def authentication_message(self, sender: int, username: str, password: str) -> Message:
        raise ConfigurationError("authentication needs an AuthenticatingMessageFactory")


class MessageFactoryLayer(MessageFactory):
    '''Forwards every construction to the wrapped factory.'''

    def __init__(self, inner: MessageFactory):
        self.inner = inner   # next factory down the chain

    def connection_message(self, sender: int) -> Message:
        return self.inner.connection_message(sender)

    def text_message(self, sender: int, body: str) -> Message:
        return self.inner.text_message(sender, body)

    def colored_text_message(self, sender: int, body: str, color: str) -> Message:
        return self.inner.colored_text_message(sender, body, color)

    def authentication_message(self, sender: int, username: str, password: str) -> Message:
        return self.inner.authentication_message(sender, username, password)


class EncryptingMessageFactory(MessageFactoryLayer):
    '''Encrypts whatever the wrapped factory builds.'''

    def __init__(self, inner: MessageFactory, method: EncryptionMethod):
        super().__init__(inner)
        self.method = method

    # connection messages carry nothing to transform, encrypt is a no-op for them
    def connection_message(self, sender: int) -> Message:
        return super().connection_message(sender).encrypt(self.method)

    def text_message(self, sender: int, body: str) -> Message:
        return super().text_message(sender, body).encrypt(self.method)

    def colored_text_message(self, sender: int, body: str, color: str) -> Message:
        return super().colored_text_message(sender, body, color).encrypt(self.method)

    def authentication_message(self, sender: int, username: str, password: str) -> Message:
        return super().authentication_message(sender, username, password).encrypt(self.method)


class AuthenticatingMessageFactory(MessageFactoryLayer):
    ''' Enables authentication messages; everything else passes through '''

    def authentication_message(self, sender: int, username: str, password: str) -> Message:
        return AuthenticationMessage(sender, username, password)


class ColoringMessageFactory(MessageFactoryLayer):
    ''' Enables colored text; everything else passes through '''

    def colored_text_message(self, sender: int, body: str, color: str) -> Message:
        return TextMessage(sender, body, color)
