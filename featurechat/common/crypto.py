from typing import Dict, Mapping

from cryptography.hazmat.primitives import constant_time

from .errors import ConfigurationError

ENC = "utf-8"   # encoding used when comparing secrets


class EncryptionMethod:
    '''
    Base class for the reversible text transforms.
    Both transforms are involutions, so decrypt simply re-applies encrypt.
    '''
    name = ""

    def encrypt(self, text: str) -> str:
        raise NotImplementedError

    def decrypt(self, text: str) -> str:
        return self.encrypt(text)

    def __repr__(self):
        return self.name.upper()


class Rot13(EncryptionMethod):
    ''' Rotates ASCII letters by 13 places, keeping case; everything else passes through '''
    name = "rot13"

    def encrypt(self, text: str) -> str:
        out = []
        for c in text:
            if "A" <= c <= "Z":
                out.append(chr((ord(c) - ord("A") + 13) % 26 + ord("A")))
            elif "a" <= c <= "z":
                out.append(chr((ord(c) - ord("a") + 13) % 26 + ord("a")))
            else:
                out.append(c)
        return "".join(out)


class Reverse(EncryptionMethod):
    ''' Reverses the character order of the text '''
    name = "reverse"

    def encrypt(self, text: str) -> str:
        return text[::-1]


ROT13 = Rot13()
REVERSE = Reverse()

METHODS: Dict[str, EncryptionMethod] = {m.name: m for m in (ROT13, REVERSE)}


def method_by_name(name: str) -> EncryptionMethod:
    '''
    The function looks up an encryption method by its configuration name.
        Input: name such as "rot13" or "reverse" (case-insensitive)
        Output: the matching EncryptionMethod singleton
    '''
    try:
        return METHODS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"unknown encryption method: {name!r}") from None


def password_matches(store: Mapping[str, str], username: str, password: str) -> bool:
    '''
    This function checks a username/password pair against a credential store.
    Input:
        - store: mapping of username to password
        - username, password: the submitted credentials
    Output: True only if the user exists and the passwords are equal
    '''
    expected = store.get(username)
    if expected is None:
        return False
    # constant-time comparison of the encoded secrets
    return constant_time.bytes_eq(expected.encode(ENC), password.encode(ENC))
