from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ListId(Enum):
    NOW_PLAYING = "now_playing"
    UPCOMING = "upcoming"


class ListStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class MovieRecord:
    id: int
    title: str
    backdrop_path: Optional[str]
    poster_path: Optional[str]
    overview: str
    vote_average: float
    release_date: str


@dataclass
class MoviesResponse:
    page: int
    total_pages: int
    results: List[MovieRecord]


@dataclass
class MovieView:
    id: int
    title: str
    overview: str
    rating: str
    release_date: str
    backdrop_url: str
    poster_url: str


@dataclass
class PageState:
    current_page: int = 0
    total_pages: int = 0
    status: ListStatus = ListStatus.IDLE

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages
