"""
Router error handling.

Decorator mapping the domain exception hierarchy onto HTTP responses so
every endpoint reports errors the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from studybuddy.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_service_errors(func: F) -> F:
    """
    Decorator to turn service exceptions into HTTPExceptions.

    - ValidationError -> 400
    - NotFoundError (chat, quiz, study plan, note, topic) -> 404
    - pydantic ValidationError -> 422
    - anything else -> 500, logged with traceback
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False),
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in %s",
                func.__name__,
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper  # type: ignore
