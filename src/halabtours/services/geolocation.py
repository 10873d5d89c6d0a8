"""One-shot resolution of the visitor's position."""

import concurrent.futures
import logging
from typing import Callable, Optional

from ..models.place import Coordinates

logger = logging.getLogger(__name__)

# Aleppo city centre, used whenever the real position is unavailable
FALLBACK_LOCATION = Coordinates(latitude=36.1999, longitude=37.1500)
DEFAULT_TIMEOUT = 10.0

Locator = Callable[[], Optional[Coordinates]]


def resolve_user_location(
    locate: Optional[Locator] = None,
    timeout: float = DEFAULT_TIMEOUT,
    fallback: Coordinates = FALLBACK_LOCATION,
) -> Coordinates:
    """Ask ``locate`` for the current position, once.

    Args:
        locate: Callable returning the position; may raise or return None
        timeout: Seconds to wait for ``locate`` before giving up
        fallback: Position used when locating fails

    Returns:
        The located position, or ``fallback``
    """
    if locate is None:
        return fallback

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = executor.submit(locate)
    try:
        location = future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        logger.warning(f"Locating the user took longer than {timeout}s, using fallback")
        return fallback
    except Exception as e:
        logger.warning(f"Failed to locate the user: {str(e)}, using fallback")
        return fallback
    finally:
        # A hung locator must not block the caller
        executor.shutdown(wait=False)

    if location is None:
        logger.warning("Locator returned no position, using fallback")
        return fallback

    logger.info(f"User located at {location.latitude}, {location.longitude}")
    return location
