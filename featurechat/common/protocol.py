import logging
from threading import Lock
from typing import Dict, Optional

from .errors import AlreadyRegistered, NotRegistered, UnknownReceiver
from .messages import Message

logger = logging.getLogger(__name__)


class Participant:
    '''
    Anything the network can deliver messages to: a server or a client,
    bare or wrapped in feature layers.
    '''

    def __init__(self):
        self._address: Optional[int] = None   # bound once by Network.register

    @property
    def address(self) -> int:
        if self._address is None:
            raise NotRegistered(f"{type(self).__name__} has not been registered with a network")
        return self._address

    @address.setter
    def address(self, value: int):
        if self._address is not None:
            raise AlreadyRegistered(f"{type(self).__name__} already has address {self._address}")
        self._address = value

    @property
    def registered(self) -> bool:
        return self._address is not None

    def handle_message(self, message: Message) -> bool:
        ''' Handle one delivered message; return whether this participant accepted it '''
        raise NotImplementedError


class Layer(Participant):
    '''
    A feature wrapper around an inner participant. Forwards everything by
    default; the address lives on the innermost participant.
    '''

    def __init__(self, inner: Participant):
        # no Participant.__init__: the address is always read through to the inner layer
        self.inner = inner

    @property
    def address(self) -> int:
        return self.inner.address

    @address.setter
    def address(self, value: int):
        self.inner.address = value

    @property
    def registered(self) -> bool:
        return self.inner.registered

    def handle_message(self, message: Message) -> bool:
        return self.inner.handle_message(message)


class Network:
    ''' In-process network that hands messages straight to the receiver's handler '''

    def __init__(self):
        self.lock = Lock()   # guards the registry only; delivery runs unlocked so handlers can reply
        self._next_address = 0
        self._participants: Dict[int, Participant] = {}

    def register(self, participant: Participant) -> int:
        '''
        This function registers a participant and binds a fresh address into it.
        Input:
            - participant: the outermost layer of a server or client
        Output: the assigned address (strictly increasing, never reused)
        '''
        with self.lock:
            address = self._next_address
            participant.address = address
            self._next_address += 1
            self._participants[address] = participant
        logger.debug("registered %s at address %d", type(participant).__name__, address)
        return address

    def send_message(self, receiver: int, message: Message) -> None:
        '''
        This function delivers a message synchronously to the participant bound to receiver.
        Raises UnknownReceiver if nobody is registered at that address.
        '''
        with self.lock:
            participant = self._participants.get(receiver)
        if participant is None:
            raise UnknownReceiver(receiver)
        logger.debug("delivering %s from %d to %d", message.kind.value, message.sender, receiver)
        participant.handle_message(message)

    def __contains__(self, address: int) -> bool:
        with self.lock:
            return address in self._participants

    def __len__(self):
        with self.lock:
            return len(self._participants)
