"""Messaging channel clients."""

from outbox.services.channel.base import ChannelClient
from outbox.services.channel.gateway_client import GatewayChannelClient

__all__ = ["ChannelClient", "GatewayChannelClient"]
