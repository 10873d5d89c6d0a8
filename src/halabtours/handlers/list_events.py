import logging

from ..models.api import ListEventsRequest, ListEventsResponse
from ..services.api_client import ApiError
from ..services.discovery import collect_events, filter_events
from ..utils.general_utils import get_place_cache
from .list_places import JSON_HEADERS, error_response, merge_event

logger = logging.getLogger(__name__)


def handler(event, context):
    """Return the events of every place, filtered and ordered by start date."""
    try:
        request = ListEventsRequest.model_validate(merge_event(event))
        filters = request.to_filter_state()
    except (ValueError, TypeError) as e:
        logger.warning(f"Rejected list events request: {str(e)}")
        return error_response(400, f"Invalid request: {str(e)}")

    try:
        places = get_place_cache().get_places()

        events = filter_events(collect_events(places), filters, request.search)
        response = ListEventsResponse(
            events=events,
            total_count=len(events),
            is_authenticated=request.access_token is not None,
        )
        return {
            "statusCode": 200,
            "body": response.model_dump_json(by_alias=True),
            "headers": JSON_HEADERS,
        }

    except ApiError as e:
        logger.exception(f"Error fetching places: {str(e)}")
        return error_response(502, f"Failed to fetch events: {e.message}")
    except Exception as e:
        logger.exception(f"Error listing events: {str(e)}")
        return error_response(500, f"Failed to list events: {str(e)}")
