import os
from openpyxl import load_workbook

from movie_browser.report_io import HEADERS, write_excel
from movie_browser.schemas import ListId, MovieView


def make_view(movie_id: int, title: str) -> MovieView:
    return MovieView(
        id=movie_id,
        title=title,
        overview="overview",
        rating="7.5",
        release_date="05.03.2020",
        backdrop_url="https://image.tmdb.org/t/p/w500/backdrop",
        poster_url="https://image.tmdb.org/t/p/w500",
    )


def test_write_excel_writes_one_sheet_per_list(tmp_path):
    output = os.path.join(tmp_path, "movie_browser.xlsx")
    movie_lists = {
        ListId.NOW_PLAYING: [make_view(1, "A (2020)"), make_view(2, "B (2020)")],
        ListId.UPCOMING: [make_view(3, "C (2021)")],
    }

    write_excel(movie_lists, output)

    wb = load_workbook(output)
    assert wb.sheetnames == ["Now Playing", "Upcoming"]

    now_playing = wb["Now Playing"]
    assert [cell.value for cell in now_playing[1]] == HEADERS
    assert all(cell.font.bold for cell in now_playing[1])
    assert now_playing.freeze_panes == "A2"
    assert [cell.value for cell in now_playing[2]] == [
        1,
        "A (2020)",
        "7.5",
        "05.03.2020",
        "overview",
        "https://image.tmdb.org/t/p/w500",
        "https://image.tmdb.org/t/p/w500/backdrop",
    ]
    assert now_playing.max_row == 3
    assert wb["Upcoming"].max_row == 2
    assert not os.path.exists(f"{output}.tmp")


def test_write_excel_logs_and_cleans_up_on_save_error(tmp_path, mocker):
    output = os.path.join(tmp_path, "movie_browser.xlsx")
    mocker.patch("openpyxl.Workbook.save", side_effect=PermissionError("read-only"))
    log_mock = mocker.patch("logging.error")

    write_excel({ListId.NOW_PLAYING: [make_view(1, "A (2020)")]}, output)

    assert not os.path.exists(output)
    assert not os.path.exists(f"{output}.tmp")
    log_mock.assert_called_once()
