"""Collaborator clients for the event roster.

This package provides the protocols the controller consumes and their
HTTP implementations.
"""

from roster.clients.base import EventStoreClient, UserDirectoryClient
from roster.clients.http import HTTPEventStore, HTTPUserDirectory

__all__ = [
    "EventStoreClient",
    "HTTPEventStore",
    "HTTPUserDirectory",
    "UserDirectoryClient",
]
