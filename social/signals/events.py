"""Domain events emitted by the social graph and content ingestion.

Every signal is sent with keyword arguments only. Follow events carry
``follower_id`` and ``target_id``; content events carry ``recipient_id``,
``sender_id``, ``thread_id`` and optionally ``reply_id``;
``content_published`` carries ``author_id``, ``content`` and ``thread_id``.
"""

from django.dispatch import Signal

# Social graph
follow_requested = Signal()
follow_accepted = Signal()
new_follower = Signal()

# Content
thread_liked = Signal()
reply_liked = Signal()
thread_replied = Signal()
thread_reposted = Signal()
content_published = Signal()
