from datetime import datetime
from typing import Optional

from movie_browser.schemas import MovieRecord, MovieView

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

WIRE_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d.%m.%Y"


def make_image_url(path: Optional[str]) -> str:
    # An absent path yields the bare base URL.
    return f"{IMAGE_BASE_URL}{path or ''}"


def format_release_date(release_date: str) -> str:
    """Reformat an API date ("YYYY-MM-DD") for display ("DD.MM.YYYY").

    Raises ValueError for anything that is not a valid API date.
    """
    parsed = datetime.strptime(release_date, WIRE_DATE_FORMAT)
    return parsed.strftime(DISPLAY_DATE_FORMAT)


def make_movie_view(record: MovieRecord) -> MovieView:
    release_date = format_release_date(record.release_date)
    year = record.release_date[:4]

    return MovieView(
        id=record.id,
        title=f"{record.title} ({year})",
        overview=record.overview,
        rating=str(record.vote_average),
        release_date=release_date,
        backdrop_url=make_image_url(record.backdrop_path),
        poster_url=make_image_url(record.poster_path),
    )
