from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Page:
    """A template to render and the data it needs."""

    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass
class Redirect:
    url: str
