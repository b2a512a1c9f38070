"""
Descriptor Table.

Human-readable descriptions for well-known Discourse statistics, shown
next to field names in the interactive menu. Fields without an entry are
still listed, just without a description.
"""

from types import MappingProxyType

DESCRIPTORS = MappingProxyType({
    # Users and activity
    "active_users_last_day": "unique users active in the last day",
    "active_users_7_days": "unique users active in the last 7 days",
    "active_users_30_days": "unique users active in the last 30 days",
    "participating_users_last_day": "unique users who participated in the last day",
    "participating_users_7_days": "unique users who participated in the last 7 days",
    "participating_users_30_days": "unique users who participated in the last 30 days",
    "users_last_day": "new users who joined in the last day",
    "users_7_days": "new users who joined in the last 7 days",
    "users_30_days": "new users who joined in the last 30 days",
    "users_count": "total registered users",
    # Content
    "likes_last_day": "likes given in the last day",
    "likes_7_days": "likes given in the last 7 days",
    "likes_30_days": "likes given in the last 30 days",
    "likes_count": "total likes on the site",
    "posts_last_day": "posts created in the last day",
    "posts_7_days": "posts created in the last 7 days",
    "posts_30_days": "posts created in the last 30 days",
    "posts_count": "total posts on the site",
    "topics_last_day": "topics created in the last day",
    "topics_7_days": "topics created in the last 7 days",
    "topics_30_days": "topics created in the last 30 days",
    "topics_count": "total topics on the site",
    # Chat plugin
    "chat_channels_last_day": "chat channels created in the last day",
    "chat_channels_7_days": "chat channels created in the last 7 days",
    "chat_channels_30_days": "chat channels created in the last 30 days",
    "chat_channels_previous_30_days": "chat channels created in the previous 30 days",
    "chat_channels_count": "total chat channels on the site",
    "chat_messages_last_day": "chat messages posted in the last day",
    "chat_messages_7_days": "chat messages posted in the last 7 days",
    "chat_messages_30_days": "chat messages posted in the last 30 days",
    "chat_messages_previous_30_days": "chat messages posted in the previous 30 days",
    "chat_messages_count": "total chat messages posted",
    "chat_users_last_day": "unique chat users active in the last day",
    "chat_users_7_days": "unique chat users active in the last 7 days",
    "chat_users_30_days": "unique chat users active in the last 30 days",
    "chat_users_previous_30_days": "unique chat users active in the previous 30 days",
    "chat_users_count": "total chat users",
    # Visitors
    "visitors_last_day": "total unique visitors in the last day",
    "visitors_7_days": "total unique visitors in the last 7 days",
    "visitors_30_days": "total unique visitors in the last 30 days",
    "eu_visitors_last_day": "EU unique visitors in the last day",
    "eu_visitors_7_days": "EU unique visitors in the last 7 days",
    "eu_visitors_30_days": "EU unique visitors in the last 30 days",
})


def describe(key: str) -> str | None:
    """Description for a statistic, or None if it has none."""
    return DESCRIPTORS.get(key)
