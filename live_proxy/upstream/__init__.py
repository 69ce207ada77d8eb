from .resolver import EndpointResolver
from .endpoints import Candidate, build_candidates
from .connector import ConnectFn, UpstreamSocket
from .translator import MessageTranslator

__all__ = [
    "Candidate",
    "ConnectFn",
    "EndpointResolver",
    "MessageTranslator",
    "UpstreamSocket",
    "build_candidates",
]
