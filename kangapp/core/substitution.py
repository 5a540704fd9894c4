"""Token substitution for marked template files.

Template files carry ``%TOKEN%`` placeholders. Tokens are matched
case-insensitively and looked up in a variable set keyed by lowercase name:

    >>> render("title: '%NAME%'", {"name": "my-app"})
    "title: 'my-app'"

Unknown tokens are an error rather than being rendered as an empty or
placeholder string.
"""
import re
from typing import Mapping

TOKEN_PATTERN = re.compile(r"%(\w+)%")


class UndefinedVariableError(KeyError):
    """Raised when a template references a token missing from the variable set."""

    def __init__(self, token: str):
        self.token = token
        self.key = token.lower()
        super().__init__(token)

    def __str__(self) -> str:
        return f"Undefined template variable '%{self.token}%' (expected key '{self.key}')"


def render(source: str, variables: Mapping[str, str]) -> str:
    """Replace every ``%TOKEN%`` in source with its value.

    Args:
        source: Template text
        variables: Mapping from lowercase token name to replacement string

    Returns:
        Rendered text

    Raises:
        UndefinedVariableError: If a token has no entry in variables
    """

    def _replace(match: "re.Match[str]") -> str:
        token = match.group(1)
        try:
            return str(variables[token.lower()])
        except KeyError:
            raise UndefinedVariableError(token) from None

    return TOKEN_PATTERN.sub(_replace, source)
