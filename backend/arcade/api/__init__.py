from flask import request

from arcade.errors import ConfigurationError


def json_object() -> dict:
    """The request's JSON body as a dict; a missing or unparseable body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError('Request body must be a JSON object')
    return data
