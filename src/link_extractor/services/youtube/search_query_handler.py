from __future__ import annotations

from typing import Optional, Sequence

from link_extractor.core.interfaces import SearchQueryHandlerFactory
from link_extractor.core.scraping.normalizer import encode_url_utf8

ALL = "all"
VIDEOS = "videos"
CHANNELS = "channels"
PLAYLISTS = "playlists"

MUSIC_SONGS = "music_songs"
MUSIC_VIDEOS = "music_videos"
MUSIC_ALBUMS = "music_albums"
MUSIC_PLAYLISTS = "music_playlists"
MUSIC_ARTISTS = "music_artists"

MUSIC_FILTERS = (MUSIC_SONGS, MUSIC_VIDEOS, MUSIC_ALBUMS, MUSIC_PLAYLISTS, MUSIC_ARTISTS)

SEARCH_URL = "https://www.youtube.com/results?search_query="
MUSIC_SEARCH_URL = "https://music.youtube.com/search?q="

# "sp" values as they appear in the results URL (already double encoded)
_URL_SEARCH_PARAMS = {
    VIDEOS: "&sp=EgIQAfABAQ%253D%253D",
    CHANNELS: "&sp=EgIQAvABAQ%253D%253D",
    PLAYLISTS: "&sp=EgIQA_ABAQ%253D%253D",
}
_DEFAULT_URL_SEARCH_PARAM = "&sp=8AEB"

# same values for the search API body
_API_SEARCH_PARAMS = {
    VIDEOS: "EgIQAfABAQ%3D%3D",
    CHANNELS: "EgIQAvABAQ%3D%3D",
    PLAYLISTS: "EgIQA_ABAQ%3D%3D",
}
_DEFAULT_API_SEARCH_PARAM = "8AEB"


def get_search_parameter(content_filter: Optional[str]) -> str:
    """``sp`` value for the given content filter; empty for music filters."""
    if not content_filter:
        return _DEFAULT_API_SEARCH_PARAM
    if content_filter in MUSIC_FILTERS:
        return ""
    return _API_SEARCH_PARAMS.get(content_filter, _DEFAULT_API_SEARCH_PARAM)


class YoutubeSearchQueryHandlerFactory(SearchQueryHandlerFactory):
    """Builds YouTube and YouTube Music search URLs.

    Only the first content filter is used. The sort filter is ignored.
    """

    available_content_filter = (
        ALL,
        VIDEOS,
        CHANNELS,
        PLAYLISTS,
        MUSIC_SONGS,
        MUSIC_VIDEOS,
        MUSIC_ALBUMS,
        MUSIC_PLAYLISTS,
        # MUSIC_ARTISTS is understood by get_list_url but not offered
    )

    def get_list_url(
        self,
        id: str,
        content_filters: Sequence[str],
        sort_filter: Optional[str],
        base_url: Optional[str] = None,
    ) -> str:
        query = encode_url_utf8(id)
        if content_filters:
            content_filter = content_filters[0]
            if content_filter in _URL_SEARCH_PARAMS:
                return SEARCH_URL + query + _URL_SEARCH_PARAMS[content_filter]
            if content_filter in MUSIC_FILTERS:
                return MUSIC_SEARCH_URL + query
        return SEARCH_URL + query + _DEFAULT_URL_SEARCH_PARAM


search_query_handler_factory = YoutubeSearchQueryHandlerFactory()
