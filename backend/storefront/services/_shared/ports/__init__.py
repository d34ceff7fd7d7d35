"""
storefront.services._shared.ports
=================================

*Ports* (hexagonal interfaces) the service layer depends on. Concrete
adapters live under :mod:`storefront.infra`.

Modules
-------
- :mod:`token_provider`: :class:`~.TokenProvider`: sign and verify JWTs.
- :mod:`key_value_cache`: :class:`~.KeyValueCache`: GET/SET/DEL with TTL.
- :mod:`image_storage`: :class:`~.ImageStorage`: upload/destroy product images.
- :mod:`identity_provider`: :class:`~.IdentityProvider` and
  :class:`~.FederatedProfile`: OAuth sign-in.
"""

from __future__ import annotations

from .identity_provider import FederatedProfile, IdentityProvider
from .image_storage import ImageStorage
from .key_value_cache import KeyValueCache
from .token_provider import TokenProvider

__all__ = [
    "FederatedProfile",
    "IdentityProvider",
    "ImageStorage",
    "KeyValueCache",
    "TokenProvider",
]
