"""
Screens of the application, one class per screen.

Each view holds its own state and exposes async actions; the HTTP layer in
`commanders_vault.api` only forwards requests to them.
"""

from commanders_vault.views.assistant import CANNED_REPLIES, WELCOME_MESSAGE, AssistantView, Message
from commanders_vault.views.auth_screen import AuthMode, AuthScreen
from commanders_vault.views.collection import CollectionMode, CollectionView
from commanders_vault.views.deck_builder import DeckBuilderMode, DeckBuilderView
from commanders_vault.views.session import SessionProvider
from commanders_vault.views.shell import Screen, Shell, Tab

__all__ = [
    "CANNED_REPLIES",
    "WELCOME_MESSAGE",
    "AssistantView",
    "AuthMode",
    "AuthScreen",
    "CollectionMode",
    "CollectionView",
    "DeckBuilderMode",
    "DeckBuilderView",
    "Message",
    "Screen",
    "SessionProvider",
    "Shell",
    "Tab",
]
