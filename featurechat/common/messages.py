from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .crypto import EncryptionMethod


class MessageKind(Enum):
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    TEXT = "text"


# Messages are immutable; encrypt/decrypt always hand back a new instance.
@dataclass(frozen=True)
class Message:
    sender: int   # network address of the participant that built the message

    kind = None   # class-level discriminant, set by each variant

    def encrypt(self, method: EncryptionMethod) -> "Message":
        return self

    def decrypt(self, method: EncryptionMethod) -> "Message":
        return self


@dataclass(frozen=True)
class ConnectionMessage(Message):
    kind = MessageKind.CONNECTION

    def __str__(self):
        return f"[{self.sender}] Connecting to server."


@dataclass(frozen=True)
class AuthenticationMessage(Message):
    username: str
    password: str

    kind = MessageKind.AUTHENTICATION

    def encrypt(self, method: EncryptionMethod) -> "AuthenticationMessage":
        return replace(self, username=method.encrypt(self.username),
                       password=method.encrypt(self.password))

    def decrypt(self, method: EncryptionMethod) -> "AuthenticationMessage":
        return replace(self, username=method.decrypt(self.username),
                       password=method.decrypt(self.password))

    def __str__(self):
        return f"[{self.sender}] u={self.username} p={self.password}"


@dataclass(frozen=True)
class TextMessage(Message):
    body: str
    color: Optional[str] = None   # ANSI escape, only honoured by coloring clients

    kind = MessageKind.TEXT

    def encrypt(self, method: EncryptionMethod) -> "TextMessage":
        return replace(self, body=method.encrypt(self.body))

    def decrypt(self, method: EncryptionMethod) -> "TextMessage":
        return replace(self, body=method.decrypt(self.body))

    def __str__(self):
        return f"[{self.sender}] {self.body}"
