"""Signals sent by channel clients on readiness transitions.

``channel_ready`` is sent once the channel can deliver messages and
``channel_disconnected`` when it stops being usable. Both are sent with
``client=<ChannelClient>``; ``channel_disconnected`` also carries
``reason=<str | None>``.
"""

from django.dispatch import Signal

channel_ready = Signal()
channel_disconnected = Signal()
