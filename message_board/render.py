from typing import Iterable

from jinja2 import Environment

from .models import Message


PAGE_TEMPLATE = (
    "<head>"
    "<title>microservice</title>"
    "<style>body { font-family: monospace }</style>"
    "</head>"
    "<body>"
    "<ul>"
    "{% for m in messages %}"
    "<li>{{ m.username }} ({{ m.timestamp }}): {{ m.message }}</li>"
    "{% endfor %}"
    "</ul>"
    "</body>"
)

_env = Environment(autoescape=True)
_page = _env.from_string(PAGE_TEMPLATE)


def render_page(messages: Iterable[Message]) -> str:
    return _page.render(messages=messages)
