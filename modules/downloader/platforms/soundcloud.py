"""
SoundCloud 平台处理器
"""

from typing import Dict, Any
from .base import BasePlatform
from ..models import MEDIA_AUDIO, RESULT_AUDIO, NormalizedResult, Platform
from ..text_utils import escape_html


class SoundCloudPlatform(BasePlatform):
    """SoundCloud 平台"""

    platform = Platform.SOUNDCLOUD

    def __init__(self):
        super().__init__()
        self.supported_domains = ['soundcloud.com']
        self.endpoint = 'soundcloud'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        download = self.dig(payload, 'result', 'downloadUrl')
        if not download:
            self.fail('Invalid data.')

        result = payload['result']
        title = result.get('title') or 'SoundCloud Audio'
        artist = result.get('author') or 'Unknown Artist'
        genre = result.get('genre') or ''

        caption = (
            "SoundCloud Audio:\n"
            f"{artist} - {title}.mp3\n"
            f"By: <b>{escape_html(artist)}</b>\n"
            f"Title: <i>{escape_html(title)}</i>"
        )
        if genre:
            caption += f"\nGenre: <i>{escape_html(genre)}</i>"

        return NormalizedResult(
            type=RESULT_AUDIO,
            media=[{'url': download, 'type': MEDIA_AUDIO}],
            caption=caption,
            title=title,
        )
