"""
Spotify 平台处理器

下载地址可能是字符串，也可能是曲目列表（取第一首）
"""

from typing import Dict, Any
from .base import BasePlatform, UNTITLED
from ..models import MEDIA_AUDIO, RESULT_AUDIO, NormalizedResult, Platform
from ..text_utils import escape_html


class SpotifyPlatform(BasePlatform):
    """Spotify 平台"""

    platform = Platform.SPOTIFY

    def __init__(self):
        super().__init__()
        self.supported_domains = ['spotify.com']
        self.endpoint = 'spotify'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        data = self.root(payload, 'data', 'Spotify data not found.')

        title = data.get('title') or UNTITLED
        artist = data.get('artist') or '(Unknown)'
        thumbnail = data.get('thumbnail') or None
        caption = (
            "Spotify Downloader\n\n"
            f"<b>Title:</b> {escape_html(title)}\n"
            f"<b>Artist:</b> {escape_html(artist)}\n"
        )

        download = payload.get('download')
        if download and isinstance(download, str):
            caption += f"<b>Download:</b> {escape_html(title)}"
            media_url = download
        elif download and isinstance(download, list) and self.dig(download[0], 'mediaUrl'):
            track = download[0]
            track_title = track.get('title') or '(No title)'
            track_number = track.get('number') or ''
            caption += f"<b>Track:</b> #{track_number} {escape_html(track_title)}"
            media_url = track['mediaUrl']
        else:
            self.fail('Invalid format.')

        return NormalizedResult(
            type=RESULT_AUDIO,
            media=[{'url': media_url, 'type': MEDIA_AUDIO}],
            caption=caption,
            thumbnail=thumbnail,
            title=data.get('title'),
        )
