import pytest

from movie_browser.mapper import IMAGE_BASE_URL, format_release_date, make_movie_view
from movie_browser.schemas import MovieRecord


def make_record(**overrides) -> MovieRecord:
    fields = dict(
        id=0,
        title="title",
        backdrop_path="/backdrop",
        poster_path="/poster",
        overview="overview",
        vote_average=1.0,
        release_date="2020-03-05",
    )
    fields.update(overrides)
    return MovieRecord(**fields)


def test_make_movie_view_maps_every_field():
    movie = make_movie_view(make_record())

    assert movie.id == 0
    assert movie.title == "title (2020)"
    assert movie.overview == "overview"
    assert movie.rating == "1.0"
    assert movie.release_date == "05.03.2020"
    assert movie.backdrop_url == "https://image.tmdb.org/t/p/w500/backdrop"
    assert movie.poster_url == "https://image.tmdb.org/t/p/w500/poster"


def test_make_movie_view_missing_image_paths_use_bare_base_url():
    movie = make_movie_view(make_record(backdrop_path=None, poster_path=None))

    assert movie.backdrop_url == IMAGE_BASE_URL
    assert movie.poster_url == IMAGE_BASE_URL


def test_make_movie_view_keeps_rating_unrounded():
    """Uses the real Spider-Man: No Way Home fields."""
    record = make_record(
        id=634649,
        title="Spider-Man: No Way Home",
        vote_average=7.94,
        release_date="2021-12-15",
    )
    movie = make_movie_view(record)

    assert movie.title == "Spider-Man: No Way Home (2021)"
    assert movie.rating == "7.94"
    assert movie.release_date == "15.12.2021"


@pytest.mark.parametrize("bad_date", ["", "2020", "05.03.2020", "2020-13-01"])
def test_malformed_release_date_raises(bad_date):
    with pytest.raises(ValueError):
        make_movie_view(make_record(release_date=bad_date))


def test_format_release_date():
    assert format_release_date("1999-10-15") == "15.10.1999"
