from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import APIError, HttpClient
from boudoir_console.clients.boudoir_client_sdk.modules.analytics_client import AnalyticsClient
from boudoir_console.clients.boudoir_client_sdk.modules.articles_client import ArticlesClient
from boudoir_console.clients.boudoir_client_sdk.modules.auth_client import AuthClient
from boudoir_console.clients.boudoir_client_sdk.modules.moderation_client import ModerationClient
from boudoir_console.clients.boudoir_client_sdk.modules.notifications_client import NotificationsClient
from boudoir_console.clients.boudoir_client_sdk.modules.users_client import UsersClient

__all__ = [
    "APIError",
    "AuthStore",
    "HttpClient",
    "AuthClient",
    "ArticlesClient",
    "ModerationClient",
    "AnalyticsClient",
    "NotificationsClient",
    "UsersClient",
]
