import time
import random
import requests
import logging
from typing import Any, Dict, List, Protocol

from movie_browser.schemas import MovieRecord, MoviesResponse


class RequestError(Exception):
    """Raised for any failed request: network, HTTP status or decoding."""

    DEFAULT_MESSAGE = "The movie database request failed."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class NetworkLayer(Protocol):
    def get_now_playing(self, page: int) -> MoviesResponse:
        ...

    def get_upcoming(self, page: int) -> MoviesResponse:
        ...


def required_str(item: Dict[str, Any], key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {value!r}")
    return value


def movie_record_from_json(item: Dict[str, Any]) -> MovieRecord:
    return MovieRecord(
        id=int(item["id"]),
        title=required_str(item, "title"),
        backdrop_path=item.get("backdrop_path"),
        poster_path=item.get("poster_path"),
        overview=item.get("overview") or "",
        vote_average=float(item["vote_average"]),
        release_date=required_str(item, "release_date"),
    )


def movies_response_from_json(payload: Dict[str, Any]) -> MoviesResponse:
    try:
        results: List[MovieRecord] = [
            movie_record_from_json(item) for item in payload["results"]
        ]
        return MoviesResponse(
            page=int(payload["page"]),
            total_pages=int(payload["total_pages"]),
            results=results,
        )
    except (KeyError, TypeError, ValueError) as decode_error:
        logging.error(f"Could not decode movies response: {decode_error!r}")
        raise RequestError() from decode_error


class TMDBClient:
    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: str,
        language: str = "en-US",
        request_timeout_seconds: float = 10.0,
        max_retry_attempts: int = 0,
        initial_backoff_seconds: float = 1.0,
    ):
        self.api_key = api_key
        self.language = language
        self.request_timeout = request_timeout_seconds
        self.max_retry_attempts = max_retry_attempts
        self.initial_backoff_seconds = initial_backoff_seconds
        self.http_session = requests.Session()

    def get_now_playing(self, page: int) -> MoviesResponse:
        return self._fetch_movie_list("now_playing", page)

    def get_upcoming(self, page: int) -> MoviesResponse:
        return self._fetch_movie_list("upcoming", page)

    def _fetch_movie_list(self, list_path: str, page: int) -> MoviesResponse:
        api_endpoint_url = f"{self.BASE_URL}/movie/{list_path}"
        request_params = {
            "api_key": self.api_key,
            "language": self.language,
            "page": page,
        }

        for current_attempt in range(self.max_retry_attempts + 1):
            try:
                api_response = self.http_session.get(
                    api_endpoint_url,
                    params=request_params,
                    timeout=self.request_timeout
                )
            except requests.RequestException as network_error:
                logging.error(f"Network error for {list_path} page {page}: {network_error}")
                if current_attempt == self.max_retry_attempts:
                    raise RequestError() from network_error
                self._wait_with_exponential_backoff(current_attempt)
                continue

            if api_response.status_code == 200:
                try:
                    payload = api_response.json()
                except ValueError as decode_error:
                    logging.error(f"Response for {list_path} page {page} is not JSON.")
                    raise RequestError() from decode_error
                return movies_response_from_json(payload)

            if api_response.status_code in {429, 500, 502, 503, 504}:
                if current_attempt == self.max_retry_attempts:
                    break
                logging.warning(
                    f"Received status {api_response.status_code} for {list_path} page {page}. "
                    f"Retrying (attempt {current_attempt + 1}/{self.max_retry_attempts + 1})..."
                )
                self._wait_with_exponential_backoff(current_attempt)
                continue

            logging.error(
                f"Failed to fetch {list_path} page {page} with unrecoverable status: {api_response.status_code}"
            )
            raise RequestError()

        logging.error(f"All attempts failed for {list_path} page {page}")
        raise RequestError()

    def _wait_with_exponential_backoff(self, attempt_number: int):
        exponential_delay = self.initial_backoff_seconds * (2 ** attempt_number)
        jitter_delay = random.uniform(0, 0.5)
        total_wait_time = exponential_delay + jitter_delay
        time.sleep(total_wait_time)
