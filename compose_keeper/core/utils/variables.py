import re
from typing import Iterable

DEFAULT_VALUE_VARIABLE = re.compile(r'\$\{[^{}:]+:-([^}]*)\}')


def _explicit_variable(name: str) -> re.Pattern:
    return re.compile(r'\$\{' + re.escape(name) + r'(:-[^}]*)?\}')


def process_variable_substitution(yaml_string: str, variables: Iterable[tuple[str, str]]) -> str:
    """
    Substitute docker-compose variables in the raw manifest text.

    Docker-compose does this itself, but image names, ports and paths have to be known
    before the manifest is handed to it. Explicit values win over `${NAME:-default}`
    defaults, remaining defaulted variables collapse to their default and plain
    `${NAME}` without a value stays as is.
    """
    substituted = yaml_string
    for name, value in variables:
        substituted = _explicit_variable(name).sub(lambda _: str(value), substituted)

    # `$` in a default is doubled, so docker-compose reads it as a literal dollar
    return DEFAULT_VALUE_VARIABLE.sub(
        lambda match: match.group(1).replace('$', '$$'),
        substituted,
    )
