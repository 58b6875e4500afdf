import os
import logging
from typing import Dict, List
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils.exceptions import IllegalCharacterError

from movie_browser.schemas import ListId, MovieView

SHEET_TITLES = {
    ListId.NOW_PLAYING: "Now Playing",
    ListId.UPCOMING: "Upcoming",
}

HEADERS = ["ID", "Title", "Rating", "Release Date", "Overview", "Poster URL", "Backdrop URL"]


def write_excel(movie_lists: Dict[ListId, List[MovieView]], output_path: str) -> None:
    workbook = Workbook()
    # Sheets are created per list below
    workbook.remove(workbook.active)

    bold_font = Font(bold=True)

    for list_id, movies in movie_lists.items():
        sheet = workbook.create_sheet(title=SHEET_TITLES[list_id])
        sheet.freeze_panes = "A2"
        sheet.append(HEADERS)
        for cell in sheet[1]:
            cell.font = bold_font

        for movie in movies:
            sheet.append([
                movie.id,
                movie.title,
                movie.rating,
                movie.release_date,
                movie.overview,
                movie.poster_url,
                movie.backdrop_url,
            ])

    temp_path = f"{output_path}.tmp"
    try:
        workbook.save(temp_path)
        os.replace(temp_path, output_path)
    except (PermissionError, IOError, IllegalCharacterError) as e:
        logging.error(f"Failed to save Excel file due to an OS or data error: {e}")
        if os.path.exists(temp_path):
            os.remove(temp_path)
