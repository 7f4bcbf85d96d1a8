"""Display text for catalog entries, keyed by ``SnippetDescriptor.description_ref``."""

from __future__ import annotations

from typing import NamedTuple


class SnippetDescription(NamedTuple):
    title: str
    description: str


DESCRIPTIONS: dict[str, SnippetDescription] = {
    # Drives
    "get_me_drive": SnippetDescription(
        "Get my drive",
        "Gets the signed-in user's OneDrive.",
    ),
    "get_organization_drives": SnippetDescription(
        "Get organization drives",
        "Gets all of the drives in your tenant.",
    ),
    "get_me_files": SnippetDescription(
        "Get my files",
        "Lists the files and folders in the root of the signed-in user's drive.",
    ),
    "create_me_file": SnippetDescription(
        "Create a file",
        "Creates a text file with a random name in the root of the signed-in user's drive.",
    ),
    "download_me_file": SnippetDescription(
        "Download a file",
        "Creates a text file and downloads its contents.",
    ),
    "update_me_file": SnippetDescription(
        "Update a file",
        "Creates a text file and replaces its contents.",
    ),
    "delete_me_file": SnippetDescription(
        "Delete a file",
        "Creates a file and deletes it.",
    ),
    "rename_me_file": SnippetDescription(
        "Rename a file",
        "Creates a file and gives it a new random name.",
    ),
    "create_me_folder": SnippetDescription(
        "Create a folder",
        "Creates a folder with a random name, renaming it if the name is taken.",
    ),
    # Users
    "get_organization_users": SnippetDescription(
        "Get organization users",
        "Gets all of the users in your tenant's directory.",
    ),
    "get_organization_filtered_users": SnippetDescription(
        "Get filtered users",
        "Gets the users in your tenant's directory who are from the United States, using $filter.",
    ),
    "insert_organization_user": SnippetDescription(
        "Add a user",
        "Adds a new user to the tenant's directory. Not implemented.",
    ),
}


def describe(description_ref: str | None) -> SnippetDescription | None:
    if description_ref is None:
        return None
    return DESCRIPTIONS.get(description_ref)


__all__ = ["DESCRIPTIONS", "SnippetDescription", "describe"]
