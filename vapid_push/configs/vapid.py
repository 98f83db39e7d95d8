from typing import Literal

from pydantic import BaseModel, Field


class VapidConfig(BaseModel):
    """VAPID signing configuration.

    - ``PrivateKeyPath``: EC P-256 private key in PEM format, the key that
      signs every token. ``python -m vapid_push generate-keys`` creates it.
    - ``Backend``: ``native`` signs in-process with ``cryptography``,
      ``openssl`` shells out to the openssl CLI.

    Override via ``VAPIDPUSH_Vapid_PrivateKeyPath`` and friends.
    """

    PrivateKeyPath: str = Field(default="vapid/prime256v1_key.pem", description="Path to the VAPID private key pem")
    Subject: str = Field(default="mailto:admin@example.com", description="Default 'sub' claim (mailto:...)")
    Backend: Literal["native", "openssl"] = Field(default="native", description="Crypto backend used for signing")
    OpensslBinary: str = Field(default="openssl", description="openssl executable for the openssl backend")
