import json
from typing import Any, Union

from json_assert.exceptions import JsonParseError


def get_json_object(data: Any) -> Union[dict, list, Any]:
    """Return `data` as a deserialised JSON structure.

    Strings and bytes are decoded with ``json.loads``, anything else is taken
    to be deserialised already and returned unchanged, so the call is
    idempotent. Raises JsonParseError when the text is not JSON.
    """
    if not isinstance(data, (str, bytes, bytearray)):
        return data
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise JsonParseError(f"Invalid JSON text: {e.msg} (line {e.lineno}, column {e.colno})", pos=e.pos) from e
    except UnicodeDecodeError as e:
        raise JsonParseError(f"JSON bytes are not valid UTF-8/16/32: {e.reason}") from e


to_json_object = get_json_object
