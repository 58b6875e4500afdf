import os
import sys
import logging
import time
from dotenv import load_dotenv
from tqdm import tqdm

from movie_browser.home_view_model import HomeViewModel
from movie_browser.report_io import write_excel
from movie_browser.schemas import ListId, ListStatus
from movie_browser.tmdb_client import TMDBClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)


class Config:
    def __init__(self):
        load_dotenv()
        self.api_key = os.environ.get("TMDB_API_KEY")
        if not self.api_key:
            logging.error("TMDB_API_KEY not set in environment.")
            raise ValueError("Missing TMDB_API_KEY")

        self.language = os.environ.get("TMDB_LANGUAGE", "en-US")

        raw_pages = os.environ.get("MOVIE_BROWSER_PAGES", "1")
        try:
            self.pages = int(raw_pages)
        except ValueError:
            self.pages = 0
        if self.pages <= 0:
            logging.error(f"MOVIE_BROWSER_PAGES must be a positive integer, got '{raw_pages}'.")
            raise ValueError("Invalid MOVIE_BROWSER_PAGES")

        self.output_excel = os.path.join(os.getcwd(), "movie_browser.xlsx")


def load_more_pages(view_model: HomeViewModel, list_id: ListId, extra_pages: int) -> None:
    for _ in tqdm(range(extra_pages), desc=f"Loading {list_id.value} pages"):
        if not view_model.page_state(list_id).has_next_page:
            break
        view_model.load_next_page(list_id)
        if view_model.page_state(list_id).status is ListStatus.ERROR:
            break


def main() -> None:
    try:
        config = Config()
    except ValueError:
        sys.exit(1)

    client = TMDBClient(api_key=config.api_key, language=config.language)
    view_model = HomeViewModel(network_layer=client)
    start_time = time.perf_counter()

    view_model.load()
    for list_id in ListId:
        load_more_pages(view_model, list_id, config.pages - 1)

    if view_model.error_message:
        logging.warning(f"Finished with an error: {view_model.error_message}")

    movie_lists = {list_id: view_model.movies(list_id) for list_id in ListId}
    logging.info(f"Writing movie lists to {config.output_excel}")
    write_excel(movie_lists, config.output_excel)

    elapsed_seconds = max(time.perf_counter() - start_time, 0.0)
    logging.info(
        f"Loading complete. now_playing={len(view_model.now_playing_movies)}, "
        f"upcoming={len(view_model.upcoming_movies)}, elapsed={elapsed_seconds:.2f}s"
    )


if __name__ == "__main__":
    main()
