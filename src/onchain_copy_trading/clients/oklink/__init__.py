"""OKLink explorer client."""

from onchain_copy_trading.clients.oklink.oklink_client import OkLinkClient

__all__ = ["OkLinkClient"]
