import base64
from dataclasses import dataclass

from cryptography.fernet import Fernet


class SecretCodec:
    """Strategy interface for secrets stored on user profile documents."""
    def encode(self, plain: str) -> str:
        raise NotImplementedError

    def decode(self, stored: str) -> str:
        raise NotImplementedError


class Base64SecretCodec(SecretCodec):
    """
    Reversible base64 obfuscation, the format older profile documents use.
    Not encryption: anyone with read access to the document can decode it.
    """
    def encode(self, plain: str) -> str:
        return base64.b64encode(plain.encode("utf-8")).decode("ascii")

    def decode(self, stored: str) -> str:
        return base64.b64decode(stored.encode("ascii")).decode("utf-8")


@dataclass(frozen=True)
class FernetSecretCodec(SecretCodec):
    key: str

    def _fernet(self) -> Fernet:
        return Fernet(self.key.encode("ascii"))

    def encode(self, plain: str) -> str:
        return self._fernet().encrypt(plain.encode("utf-8")).decode("ascii")

    def decode(self, stored: str) -> str:
        return self._fernet().decrypt(stored.encode("ascii")).decode("utf-8")


def codec_from_settings(codec: str, fernet_key: str = "") -> SecretCodec:
    if codec == "base64":
        return Base64SecretCodec()
    if codec == "fernet":
        return FernetSecretCodec(key=fernet_key)
    raise ValueError(f"Unknown secret codec: {codec!r}")
