from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from . import ciphers
from .likelihood import from_label
from .types import DecodeResult, Offer

logger = logging.getLogger(__name__)


class MessageDecoder:
    """Decodes obfuscated offers.

    Supported ciphers are ``"1"`` (Base64) and ``"2"`` (ROT13). Decoding is
    all or nothing: when the decoded likelihood label is not a known level,
    the original offer object is handed back untouched.
    """

    def decode(self, offer: Optional[Offer]) -> Optional[Offer]:
        result = self.decode_with_status(offer)
        return result.offer if result is not None else None

    def decode_with_status(self, offer: Optional[Offer]) -> Optional[DecodeResult]:
        if offer is None:
            return None
        if offer.cipher is None:
            return DecodeResult(offer=offer, status="unchanged")
        if not ciphers.is_supported(offer.cipher):
            logger.debug("Offer %s uses unknown cipher %r, passing through", offer.id, offer.cipher)
            return DecodeResult(offer=offer, status="unchanged")

        offer_id = ciphers.decode(offer.cipher, offer.id)
        text = ciphers.decode(offer.cipher, offer.text)
        label = ciphers.decode(offer.cipher, offer.likelihood_label)

        level = from_label(label)
        if level is None:
            logger.debug("Decoded label %r for offer %s is not recognized, keeping original", label, offer.id)
            return DecodeResult(offer=offer, status="unchanged")

        decoded = replace(
            offer,
            id=offer_id,
            text=text,
            likelihood_label=level.label,
            cipher=None,
        )
        return DecodeResult(offer=decoded, status="replaced")
