"""Captured request model and the parameter-name extractors that read it."""

from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel

from restdoc_params.errors import MissingPathTemplateError

class Interaction(BaseModel):
    """A single captured HTTP request."""

    method: str = "GET"
    uri: str  # http://localhost:8080/pets/1?page=2
    path_template: str | None = None  # /pets/{petId}
    form: dict[str, list[str]] = {}  # application/x-www-form-urlencoded body


def query_parameter_names(interaction: Interaction) -> set[str]:
    """Names sent in the query string or the form body."""
    query = urlsplit(interaction.uri).query
    names = {name for name, _ in parse_qsl(query, keep_blank_values=True)}
    names.update(interaction.form)
    return names


def path_parameter_names(interaction: Interaction) -> set[str]:
    """Names of the variables in the interaction's path template."""
    if not interaction.path_template:
        raise MissingPathTemplateError(
            f"Path parameters cannot be documented for {interaction.method} {interaction.uri}: "
            "the interaction has no path template"
        )
    return set(_template_variables(interaction.path_template))


def _template_variables(template: str) -> list[str]:
    # {petId}, {petId:[0-9]+}, {petId:[0-9]{3}}; nested braces belong to the regex
    names = []
    depth = 0
    start = 0
    for i, char in enumerate(template):
        if char == "{":
            if depth == 0:
                start = i + 1
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                name = template[start:i].split(":", 1)[0].strip()
                if name:
                    names.append(name)
    return names
