import asyncio

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

DEFAULT_MESSAGE = "Something went wrong on our end. Please try again."

# checked in order, so subclasses come before their bases
FRIENDLY_MESSAGES = [
    (
        (OperationalError, PoolTimeoutError, ConnectionError),
        "Unable to reach the database. Please try again shortly.",
    ),
    (
        (asyncio.TimeoutError, TimeoutError),
        "The request took too long. Please try again later.",
    ),
    (IntegrityError, "That change conflicts with existing data."),
    (DBAPIError, "Temporary issue while accessing data. Please try again shortly."),
    (
        (ValueError, KeyError),
        "Invalid data received. Please check your input and try again.",
    ),
]


def get_friendly_message(error: Exception) -> str:
    for error_types, message in FRIENDLY_MESSAGES:
        if isinstance(error, error_types):
            return message
    return DEFAULT_MESSAGE
