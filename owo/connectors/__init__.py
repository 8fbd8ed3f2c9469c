from .requester import AsyncRequester, Requester
from .requests_bridge import OwoClient, RequestsRequester
from .httpx_bridge import AsyncOwoClient, HttpxRequester, PendingResponse, build_tls_context

__all__ = [
    "Requester",
    "AsyncRequester",
    "RequestsRequester",
    "OwoClient",
    "HttpxRequester",
    "AsyncOwoClient",
    "PendingResponse",
    "build_tls_context",
]
