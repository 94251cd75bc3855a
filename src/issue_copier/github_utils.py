from __future__ import annotations

import logging
import os
from typing import Final

import requests
from github import Auth, Github, GithubException, UnknownObjectException
from github.Repository import Repository

from .exceptions import MigrationError

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

TOKEN_ENV_VAR: Final[str] = "GITHUB_TOKEN"


def get_token() -> str:
    """Get the GitHub token from the environment.

    Raises:
        MigrationError: If the token is not set
    """
    token = os.environ.get(TOKEN_ENV_VAR)
    if not token:
        msg = f"{TOKEN_ENV_VAR} environment variable not set."
        raise MigrationError(msg)
    return token


def get_client(token: str, base_url: str | None = None) -> Github:
    """Get a GitHub client using the token.

    Args:
        token: Personal access token
        base_url: API base URL for GitHub Enterprise Server (e.g. "https://ghe.example.com/api/v3")
    """
    if base_url:
        return Github(auth=Auth.Token(token), base_url=base_url)
    return Github(auth=Auth.Token(token))


def get_repo(client: Github, owner: str, repo_name: str) -> Repository:
    """Look up the target repository.

    Raises:
        MigrationError: If the repository does not exist or cannot be accessed
    """
    repo_path = f"{owner}/{repo_name}"
    try:
        repo = client.get_repo(repo_path)
    except UnknownObjectException as e:
        msg = f"Repository {repo_path} not found or not accessible with the given token"
        raise MigrationError(msg) from e
    except (GithubException, requests.RequestException) as e:
        msg = f"Error looking up repository {repo_path}: {e}"
        raise MigrationError(msg) from e

    logger.debug(f"Using target repository {repo.full_name}")
    return repo
