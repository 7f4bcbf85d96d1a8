"""User snippets: the tenant's directory."""

from __future__ import annotations

from typing import Tuple

from ..graph import client as graph
from ..graph.client import GraphClient
from .callback import ResultCallback, forward
from .model import SnippetCategory, SnippetDescriptor, marker

UNITED_STATES_FILTER = "country eq 'United States'"


class SnippetNotImplementedError(NotImplementedError):
    """Reported by catalog entries that are listed but have no request."""


async def get_organization_users(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.get_users())


async def get_organization_filtered_users(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.get_filtered_users(UNITED_STATES_FILTER))


async def insert_organization_user(client: GraphClient, callback: ResultCallback) -> None:
    callback.on_failure(SnippetNotImplementedError("Adding organization users is not implemented"))


def get_users_snippets() -> Tuple[SnippetDescriptor, ...]:
    category = SnippetCategory.USERS
    return (
        marker(category),
        SnippetDescriptor(
            id="users.get_organization_users",
            category=category,
            description_ref="get_organization_users",
            request=get_organization_users,
            http_method="GET",
            path_template=graph.ORGANIZATION_USERS,
            doc_url="https://graph.microsoft.io/docs/api-reference/v1.0/api/user_list",
        ),
        SnippetDescriptor(
            id="users.get_organization_filtered_users",
            category=category,
            description_ref="get_organization_filtered_users",
            request=get_organization_filtered_users,
            http_method="GET",
            path_template=f"{graph.ORGANIZATION_USERS}?$filter={UNITED_STATES_FILTER}",
            doc_url="http://graph.microsoft.io/docs/overview/query_parameters",
        ),
        SnippetDescriptor(
            id="users.insert_organization_user",
            category=category,
            description_ref="insert_organization_user",
            request=insert_organization_user,
            http_method="POST",
            path_template=graph.ORGANIZATION_USERS,
            doc_url="https://graph.microsoft.io/docs/api-reference/v1.0/api/user_post_users",
        ),
    )


__all__ = ["get_users_snippets", "SnippetNotImplementedError", "UNITED_STATES_FILTER"]
