"""Create-or-reuse materialization of named styles and font loading with fallback"""

import asyncio
import logging
from collections import defaultdict
from typing import Mapping

from mdsync.core.models import FontVariant, StyleConfig, StyleName
from mdsync.core.style import REGULAR
from mdsync.host.base import DocumentHost, FontService


logger = logging.getLogger(__name__)


class StyleRegistry:
    """Named styles stored in the host document, created with defaults on first lookup."""

    def __init__(self, host: DocumentHost, defaults: Mapping[StyleName, StyleConfig]):
        self.host = host
        self.defaults = defaults
        self._locks: defaultdict[StyleName, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def ensure(self, name: StyleName) -> StyleConfig:
        # check-then-create must not interleave for one name
        async with self._locks[name]:
            existing = await self.host.get_style(name.value)
            if existing is not None:
                return existing
            logger.info("Creating style %s", name.value)
            return await self.host.create_style(name.value, self.defaults[name])

    async def materialize(self) -> dict[StyleName, StyleConfig]:
        """Return every registry entry, creating the missing ones."""
        return {name: await self.ensure(name) for name in StyleName}


class FontLoader:
    """Loads font variants, falling back to the default family and then to its Regular."""

    def __init__(self, fonts: FontService, default_family: str):
        self.fonts = fonts
        self.default_family = default_family
        self._resolved: dict[FontVariant, FontVariant] = {}

    def _candidates(self, font: FontVariant) -> list[FontVariant]:
        chain = [font, FontVariant(self.default_family, font.style), FontVariant(self.default_family, REGULAR)]
        return list(dict.fromkeys(chain))

    async def resolve(self, font: FontVariant) -> FontVariant:
        """Return the loaded variant to use for font; never raises for a missing font."""
        if font in self._resolved:
            return self._resolved[font]
        chosen = None
        for candidate in self._candidates(font):
            if await self.fonts.load_font(candidate.family, candidate.style):
                chosen = candidate
                break
            logger.debug("Font not found: %s", candidate)
        if chosen is None:
            chosen = FontVariant(self.default_family, REGULAR)
            logger.warning("No installed font for %s, using %s", font, chosen)
        elif chosen != font:
            logger.info("Font %s unavailable, using %s", font, chosen)
        self._resolved[font] = chosen
        return chosen
