import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Tuple

from movie_browser.mapper import make_movie_view
from movie_browser.schemas import ListId, ListStatus, MoviesResponse, MovieView, PageState
from movie_browser.tmdb_client import NetworkLayer, RequestError

PageResult = Tuple[MoviesResponse, List[MovieView]]


def fetch_page(fetch: Callable[[int], MoviesResponse], page: int) -> PageResult:
    response = fetch(page)
    try:
        movie_views = [make_movie_view(record) for record in response.results]
    except ValueError as mapping_error:
        logging.error(f"Could not map page {page} of movies: {mapping_error}")
        raise RequestError() from mapping_error
    return response, movie_views


class HomeViewModel:
    """Holds the now-playing and upcoming lists shown on the home screen.

    Both lists start empty. ``load`` fetches the first page of each list
    concurrently; ``load_next_page`` appends the following page of one list
    until its last page has been reached. Any failure overwrites the shared
    ``error_message``; the lists keep whatever data they already had.
    """

    def __init__(self, network_layer: NetworkLayer):
        self.network_layer = network_layer
        self.now_playing_movies: List[MovieView] = []
        self.upcoming_movies: List[MovieView] = []
        self.error_message = ""
        self._page_states: Dict[ListId, PageState] = {
            ListId.NOW_PLAYING: PageState(),
            ListId.UPCOMING: PageState(),
        }

    def movies(self, list_id: ListId) -> List[MovieView]:
        if list_id is ListId.NOW_PLAYING:
            return self.now_playing_movies
        return self.upcoming_movies

    def page_state(self, list_id: ListId) -> PageState:
        return self._page_states[list_id]

    def load(self) -> None:
        self.error_message = ""
        for state in self._page_states.values():
            state.status = ListStatus.LOADING

        with ThreadPoolExecutor(max_workers=len(ListId)) as executor:
            future_to_list = {
                executor.submit(fetch_page, self._fetcher(list_id), 1): list_id
                for list_id in ListId
            }

            # Completions arrive in any order; the last failure wins error_message.
            for future in as_completed(future_to_list):
                list_id = future_to_list[future]
                try:
                    response, movie_views = future.result()
                except RequestError as error:
                    self._record_failure(list_id, error)
                    continue

                self.movies(list_id)[:] = movie_views
                self._record_success(list_id, response)

    def load_next_page(self, list_id: ListId) -> None:
        state = self.page_state(list_id)
        if not state.has_next_page:
            logging.debug(
                f"No more pages for {list_id.value} (page {state.current_page}/{state.total_pages})."
            )
            return

        next_page = state.current_page + 1
        state.status = ListStatus.LOADING
        try:
            response, movie_views = fetch_page(self._fetcher(list_id), next_page)
        except RequestError as error:
            self._record_failure(list_id, error)
            return

        self.movies(list_id).extend(movie_views)
        self._record_success(list_id, response)

    def load_next_page_for_now_playing(self) -> None:
        self.load_next_page(ListId.NOW_PLAYING)

    def load_next_page_for_upcoming(self) -> None:
        self.load_next_page(ListId.UPCOMING)

    def _fetcher(self, list_id: ListId) -> Callable[[int], MoviesResponse]:
        if list_id is ListId.NOW_PLAYING:
            return self.network_layer.get_now_playing
        return self.network_layer.get_upcoming

    def _record_success(self, list_id: ListId, response: MoviesResponse) -> None:
        state = self.page_state(list_id)
        state.current_page = response.page
        state.total_pages = response.total_pages
        state.status = ListStatus.LOADED
        logging.info(
            f"Loaded {list_id.value} page {response.page}/{response.total_pages} "
            f"({len(self.movies(list_id))} movies total)"
        )

    def _record_failure(self, list_id: ListId, error: RequestError) -> None:
        self.page_state(list_id).status = ListStatus.ERROR
        self.error_message = str(error)
        logging.error(f"Failed to load {list_id.value}: {error}")
