import json
import logging
from typing import Dict

from ..models.api import ListPlacesRequest, ListPlacesResponse
from ..services.api_client import ApiError
from ..services.discovery import discover_places
from ..utils.general_utils import get_place_cache

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",  # For CORS support
}


def error_response(status_code: int, message: str) -> Dict:
    return {
        "statusCode": status_code,
        "body": json.dumps({"error": message}),
        "headers": JSON_HEADERS,
    }


def merge_event(event: Dict) -> Dict:
    """Merge query parameters, body and request context into one dict for validation.

    Raises:
        ValueError: If the body is not a JSON object
    """
    body = event.get("body") or {}
    if isinstance(body, str):
        # API Gateway might send the body as a JSON string
        body = json.loads(body)
    if not isinstance(body, dict):
        raise ValueError(f"Request body must be a JSON object, got {type(body).__name__}")

    return {
        **(event.get("queryStringParameters") or {}),
        **body,
        "headers": event.get("headers") or {},
        "requestContext": event.get("requestContext") or {},
    }


def handler(event, context):
    """Return one page of places matching the search, filters and sort."""
    try:
        # ValidationError and JSONDecodeError are both ValueErrors
        request = ListPlacesRequest.model_validate(merge_event(event))
        filters = request.to_filter_state()
    except (ValueError, TypeError) as e:
        logger.warning(f"Rejected list places request: {str(e)}")
        return error_response(400, f"Invalid request: {str(e)}")

    try:
        places = get_place_cache().get_places()

        result = discover_places(
            places,
            filters,
            page=request.page,
            user_location=request.user_location(),
        )
        response = ListPlacesResponse(
            result=result, is_authenticated=request.access_token is not None
        )
        return {
            "statusCode": 200,
            "body": response.model_dump_json(by_alias=True),
            "headers": JSON_HEADERS,
        }

    except ApiError as e:
        logger.exception(f"Error fetching places: {str(e)}")
        return error_response(502, f"Failed to fetch places: {e.message}")
    except Exception as e:
        logger.exception(f"Error listing places: {str(e)}")
        return error_response(500, f"Failed to list places: {str(e)}")
