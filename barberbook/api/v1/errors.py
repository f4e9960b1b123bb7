from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from barberbook.application.exceptions import (
    ActionInFlightError,
    ActionNotAllowedError,
    BookingApiContractError,
    BookingApiError,
    NotFoundError,
    SessionRequiredError,
)


@contextmanager
def http_errors() -> Iterator[None]:
    """Map application errors raised inside a route to HTTP responses."""
    try:
        yield
    # ActionNotAllowedError is a ValueError, so it has to be matched first
    except ActionNotAllowedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ActionInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (BookingApiError, BookingApiContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))
