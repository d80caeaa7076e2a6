from flask import request


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def bool_arg(name: str):
    """Return True/False only for the literal strings 'true'/'false', else None."""
    value = request.args.get(name)
    if value == "true":
        return True
    if value == "false":
        return False
    return None
