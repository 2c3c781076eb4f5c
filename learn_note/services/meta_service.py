"""
Page metadata lookup used when a user pastes a link.
"""
import asyncio
import logging
from typing import Dict

import aiohttp
from bs4 import BeautifulSoup

from learn_note.utils.errors import ValidationFailure

logger = logging.getLogger(__name__)


def extract_title(html: str) -> str:
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return ""
    return soup.title.get_text(strip=True)


async def fetch_page(uri: str, timeout: float = 10) -> Dict[str, str]:
    """Fetch `uri`, following redirects; returns the final url and the body."""
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(uri, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
                if response.status != 200:
                    logger.warning(f"Failed to fetch {uri}: Status {response.status}")
                    raise ValidationFailure("Could not fetch uri")
                return {"uri": str(response.url), "html": await response.text()}
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Error fetching {uri}: {str(e)}")
        raise ValidationFailure("Could not fetch uri")


async def get_page_meta(uri: str, timeout: float = 10) -> Dict[str, str]:
    page = await fetch_page(uri, timeout)
    return {"title": extract_title(page["html"]), "uri": page["uri"]}
