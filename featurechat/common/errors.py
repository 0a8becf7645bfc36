class ChatError(Exception):
    '''Base class for every error raised by the chat engine.'''
    pass

class ConfigurationError(ChatError):
    '''Raised when an operation needs a feature layer that is not in the active stack.'''
    pass

class UnknownReceiver(ChatError, KeyError):
    '''Raised when a message is sent to an address nobody registered.'''

    def __init__(self, receiver: int):
        super().__init__(receiver)
        self.receiver = receiver

    def __str__(self):
        return f"Unknown receiver: {self.receiver}"

class ProtocolError(ChatError):
    '''Raised when a participant receives a message its role never expects.'''
    pass

class NotRegistered(ChatError):
    '''Raised when a participant's address is read before the network assigned one.'''
    pass

class AlreadyRegistered(ChatError):
    '''Raised when a second address is bound to an already registered participant.'''
    pass
