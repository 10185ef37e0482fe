"""Chain node access."""

from fundme.chain.endpoint import ChainEndpoint, encode_call
from fundme.chain.schemas import ChainIdentity, NativeCurrency, PreparedCall

__all__ = ["ChainEndpoint", "ChainIdentity", "NativeCurrency", "PreparedCall", "encode_call"]
