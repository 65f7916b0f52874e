from __future__ import annotations

from github import Github


def get_repo(owner: str, repo: str, token: str):
    return Github(token).get_repo(f"{owner}/{repo}")


def get_issue(repo, issue_number: int):
    return repo.get_issue(issue_number)
