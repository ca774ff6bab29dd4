"""
Request parsing shared by the API blueprints
"""

from flask import request

from inventory_app.buisness.inventory.errors import InvalidArgumentError
from inventory_app.buisness.inventory.validation import parse_int


def json_body():
    """The request's JSON object; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgumentError("Request body must be a JSON object")
    return data


def quantity_param():
    """
    Quantity from the `quantity` query parameter, falling back to the JSON body.

    Negative values are passed through so the stock rules can reject them.
    """
    value = request.args.get('quantity')
    if value is None:
        value = json_body().get('quantity')
    return parse_int(value, 'quantity', minimum=-(2 ** 31))


def int_arg(name, default, minimum=1):
    value = request.args.get(name)
    if value is None or value == '':
        return default
    return parse_int(value, name, minimum=minimum)


def search_term():
    return request.args.get('q', '')


def to_dicts(rows, **kwargs):
    return [row.to_dict(**kwargs) for row in rows]
