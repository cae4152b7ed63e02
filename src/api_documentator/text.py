"""String helpers for naming things in the generated document."""

import re

import inflection


def snake(value: str) -> str:
    """`userPosts` / `user-posts` -> `user_posts`."""
    return inflection.underscore(value.strip())


def headline(value: str) -> str:
    """`first_name` / `firstName` / `first-name` -> `First Name`."""
    words = [w for w in re.split(r"[\s_]+", snake(value)) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def singular(value: str) -> str:
    return inflection.singularize(value)


def studly(value: str) -> str:
    """`user_get_users_request` -> `UserGetUsersRequest`."""
    return inflection.camelize(snake(value))


def camel(value: str) -> str:
    return inflection.camelize(snake(value), uppercase_first_letter=False)


def matches_pattern(pattern: str, value: str) -> bool:
    """Glob match where `*` matches any run of characters, slashes included."""
    if pattern == value:
        return True
    regex = re.escape(pattern).replace(r"\*", ".*")
    return re.fullmatch(regex, value, flags=re.DOTALL) is not None


def plural(value: str) -> str:
    return inflection.pluralize(value)
