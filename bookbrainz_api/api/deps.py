from fastapi import HTTPException

from bookbrainz_api.services.errors import EntityNotFound, LookupFailure, ValidationError


def http_error(exc: LookupFailure) -> HTTPException:
    """Map a lookup failure onto the HTTP error returned to clients."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, EntityNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=502, detail="storage_unavailable")
