"""REST client for the tourism backend."""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..models.api import AuthResponse, LoginRequest, RegisterRequest
from ..models.commands import (
    AddPhotosCommand,
    Command,
    CreateEventCommand,
    CreatePlaceCommand,
    CreateReviewCommand,
    UpdateEventCommand,
    UpdatePlaceCommand,
    UpdateReviewCommand,
)
from ..models.place import Event, Place, Review
from .session import AuthSession

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

class ApiError(Exception):
    """Error raised for a failed backend call"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ApiError):
    """Session expired or token rejected (401)"""


class ForbiddenError(ApiError):
    """Caller lacks permission (403)"""


class NotFoundError(ApiError):
    """Requested resource does not exist (404)"""


class ValidationFailedError(ApiError):
    """Backend rejected the payload (422)"""

    def __init__(self, message: str, errors: List[str], status_code: int = 422):
        super().__init__(message, status_code)
        self.errors = errors


class ServerError(ApiError):
    """Backend failure (5xx)"""


class RequestTimeoutError(ApiError):
    """Backend did not answer within the transport timeout"""


class NetworkError(ApiError):
    """Backend could not be reached"""


class InvalidResponseError(ApiError):
    """Backend answered with a body that is not the expected JSON shape"""


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "Unknown error"
    if isinstance(body, dict) and body.get("message"):
        message = body["message"]
        return ", ".join(message) if isinstance(message, list) else str(message)
    return response.reason or "Unknown error"


def _validation_errors(response: requests.Response) -> List[str]:
    try:
        body = response.json()
    except ValueError:
        return []
    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, dict):
        return []
    flattened = []
    for messages in errors.values():
        if isinstance(messages, list):
            flattened.extend(m for m in messages if isinstance(m, str))
        elif isinstance(messages, str):
            flattened.append(messages)
    return flattened


class TourismApiClient:
    """Client for the tourism places, events, reviews and users endpoints.

    The bearer token of the attached session is sent with every request. A
    401 answer signs the session out.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[AuthSession] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or AuthSession()
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update({"Accept": "application/json"})

    def _headers(self) -> Dict[str, str]:
        if self.session.access_token:
            return {"Authorization": f"Bearer {self.session.access_token}"}
        return {}

    def _raise_for_status(self, method: str, path: str, response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return

        message = _error_message(response)
        logger.error(f"{method} {path} failed with status {status}: {message}")

        if status == 401:
            self.session.logout()
            raise UnauthorizedError(message, status)
        if status == 403:
            raise ForbiddenError(message, status)
        if status == 404:
            raise NotFoundError(message, status)
        if status == 422:
            raise ValidationFailedError(message, _validation_errors(response) or [message])
        if status >= 500:
            raise ServerError(message, status)
        raise ApiError(message, status)

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, str]] = None,
        files: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: Or one of its subclasses, depending on the failure
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                headers=self._headers(),
                json=json,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"{method} {path} timed out after {self.timeout}s")
            raise RequestTimeoutError(f"Request to {path} timed out") from e
        except requests.ConnectionError as e:
            logger.error(f"{method} {path} could not reach the backend: {str(e)}")
            raise NetworkError(f"Could not reach {self.base_url}") from e

        self._raise_for_status(method, path, response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {path} returned a non-JSON body")
            raise InvalidResponseError(
                f"Unreadable response from {path}", response.status_code
            ) from e

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        retry=retry_if_exception_type((NetworkError, RequestTimeoutError)),
        reraise=True,
    )
    def _get(self, path: str) -> Any:
        return self._request("GET", path)

    def _send(self, method: str, path: str, command: Command, multipart: bool) -> Any:
        if multipart:
            return self._request(
                method, path, data=command.to_form_fields(), files=command.to_files() or None
            )
        return self._request(method, path, json=command.to_json())

    # Users

    def login(self, request: LoginRequest) -> AuthResponse:
        body = self._request("POST", "/users/login", json=request.model_dump())
        return _parse(AuthResponse, body, "/users/login")

    def register(self, request: RegisterRequest) -> AuthResponse:
        body = self._request("POST", "/users/register", json=request.model_dump())
        return _parse(AuthResponse, body, "/users/register")

    # Places

    def list_places(self) -> List[Place]:
        """Fetch every place.

        A record that does not validate is logged and skipped, so one bad
        place cannot take down the whole listing.

        Raises:
            InvalidResponseError: If the body is not a list
        """
        body = self._get("/tourism-places") or []
        if not isinstance(body, list):
            raise InvalidResponseError("Expected a list of places from /tourism-places")

        places = []
        for record in body:
            try:
                places.append(Place.model_validate(record))
            except ValidationError as e:
                record_id = record.get("id") if isinstance(record, dict) else None
                logger.warning(f"Skipping invalid place record {record_id}: {str(e)}")
        return places

    def get_place(self, place_id: int) -> Place:
        path = f"/tourism-places/{place_id}"
        return _parse(Place, self._get(path), path)

    def create_place(self, command: CreatePlaceCommand) -> Optional[Place]:
        body = self._send("POST", "/tourism-places/create", command, multipart=True)
        return _maybe(Place, body, "/tourism-places/create")

    def update_place(self, place_id: int, command: UpdatePlaceCommand) -> Optional[Place]:
        path = f"/tourism-places/update/{place_id}"
        # JSON suffices unless a new cover image is uploaded
        multipart = bool(command.to_files())
        return _maybe(Place, self._send("PATCH", path, command, multipart), path)

    def delete_place(self, place_id: int) -> None:
        self._request("DELETE", f"/tourism-places/delete/{place_id}")

    def add_photos(self, place_id: int, command: AddPhotosCommand) -> Any:
        return self._request("POST", f"/tourism-places/{place_id}/photos", files=command.to_files())

    # Events

    def list_events(self) -> List[Event]:
        return _parse(List[Event], self._get("/events") or [], "/events")

    def list_events_by_place(self, place_id: int) -> List[Event]:
        path = f"/events/place/{place_id}"
        return _parse(List[Event], self._get(path) or [], path)

    def list_upcoming_events(self) -> List[Event]:
        return _parse(List[Event], self._get("/events/upcoming") or [], "/events/upcoming")

    def get_event(self, event_id: int) -> Event:
        path = f"/events/{event_id}"
        return _parse(Event, self._get(path), path)

    def create_event(self, command: CreateEventCommand) -> Optional[Event]:
        return _maybe(Event, self._send("POST", "/events", command, multipart=True), "/events")

    def update_event(self, event_id: int, command: UpdateEventCommand) -> Optional[Event]:
        path = f"/events/{event_id}"
        return _maybe(Event, self._send("PATCH", path, command, multipart=True), path)

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", f"/events/{event_id}")

    # Reviews

    def create_review(self, command: CreateReviewCommand) -> Optional[Review]:
        # The author is taken from the bearer token, never from the payload
        body = self._send("POST", "/reviews", command, multipart=False)
        return _maybe(Review, body, "/reviews")

    def get_review(self, review_id: int) -> Review:
        path = f"/reviews/{review_id}"
        return _parse(Review, self._get(path), path)

    def update_review(self, review_id: int, command: UpdateReviewCommand) -> Optional[Review]:
        path = f"/reviews/{review_id}"
        return _maybe(Review, self._send("PATCH", path, command, multipart=False), path)

    def delete_review(self, review_id: int) -> None:
        self._request("DELETE", f"/reviews/{review_id}")

    def list_user_reviews(self, user_id: int) -> List[Review]:
        path = f"/reviews/user/{user_id}"
        return _parse(List[Review], self._get(path) or [], path)


def _parse(model: Any, body: Any, path: str) -> Any:
    """Validate a response body against ``model``.

    Raises:
        InvalidResponseError: If the body does not match the model
    """
    try:
        return TypeAdapter(model).validate_python(body)
    except ValidationError as e:
        logger.error(f"Unexpected response shape from {path}: {str(e)}")
        raise InvalidResponseError(f"Unexpected response from {path}") from e


def _maybe(model: Any, body: Any, path: str) -> Any:
    # Mutation endpoints do not always echo the stored record
    if not isinstance(body, dict) or "id" not in body:
        return None
    return _parse(model, body, path)
