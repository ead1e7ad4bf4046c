# deps.py
from typing import Any, Dict

from fastapi import Request

from crud import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


async def read_form(request: Request) -> Dict[str, Any]:
    """Form body as a dict; repeated keys keep every value as a list."""
    form = await request.form()
    data: Dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values if len(values) > 1 else values[0]
    return data
