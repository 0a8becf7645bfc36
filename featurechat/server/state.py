from types import MappingProxyType
from typing import Mapping, Optional, Set
from threading import Lock

from ..common.crypto import password_matches


class CredentialStore:
    ''' Read-only mapping of username to password, fixed when the server is built '''

    def __init__(self, credentials: Optional[Mapping[str, str]] = None):
        self._credentials = MappingProxyType(dict(credentials or {}))

    def check(self, username: str, password: str) -> bool:
        return password_matches(self._credentials, username, password)

    def __contains__(self, username: str) -> bool:
        return username in self._credentials

    def __len__(self):
        return len(self._credentials)


class AuthenticationState:
    # This class tracks which connected addresses are pending and which are authenticated
    def __init__(self):
        self.lock = Lock()   # guards both sets
        self.required = False   # switched on by the authentication layer
        self.pending: Set[int] = set()
        self.authenticated: Set[int] = set()

    def connect(self, address: int):
        ''' Record a newly connected address: pending if authentication is required, else authenticated '''
        with self.lock:
            if address in self.authenticated:
                return
            if self.required:
                self.pending.add(address)
            else:
                self.authenticated.add(address)

    def authenticate(self, address: int):
        ''' Move an address from pending to authenticated '''
        with self.lock:
            self.pending.discard(address)
            self.authenticated.add(address)

    def is_authenticated(self, address: int) -> bool:
        with self.lock:
            return address in self.authenticated

    def is_pending(self, address: int) -> bool:
        with self.lock:
            return address in self.pending

    def recipients(self):
        ''' Authenticated addresses in ascending order, the broadcast audience '''
        with self.lock:
            return sorted(self.authenticated)
