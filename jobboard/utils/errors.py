from typing import Any, Dict, List, Sequence

from fastapi import HTTPException, status
from pydantic import ValidationError


def first_error_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Render the first pydantic error as "<field>: <message>".

    Model-level rules have no field location and are reported with just the message.
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    message = error.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    # Drop the request part ("body", "query") from the location
    loc: List[str] = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


def validation_exception(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=first_error_message(exc.errors()))
