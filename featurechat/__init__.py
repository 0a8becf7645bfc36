from .common.crypto import REVERSE, ROT13, EncryptionMethod
from .common.errors import (AlreadyRegistered, ChatError, ConfigurationError,
                            NotRegistered, ProtocolError, UnknownReceiver)
from .common.messages import (AuthenticationMessage, ConnectionMessage, Message,
                              MessageKind, TextMessage)
from .common.protocol import Network, Participant
from .config import ChatConfig, build_client, build_factory, build_server

__version__ = "0.1.0"
