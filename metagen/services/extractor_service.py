# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------
import asyncio
import io
import logging
import re
from typing import Optional, Union
from urllib.parse import urlparse

import httpx
import pytesseract
from bs4 import BeautifulSoup
from PIL import Image

from ..config import settings
from ..models.generation import ImageInput, InputVariant, TextInput, UrlInput
from .errors import FetchFailed, InvalidInput, OcrFailed

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Text normalization
# ---------------------------------------------------------------------------

def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


# ---------------------------------------------------------------------------
# Text extractor
# ---------------------------------------------------------------------------

async def extract_from_text(source: TextInput) -> str:
    if len(source.body) > settings.max_text_length:
        raise InvalidInput(
            f"テキストが長すぎます。{settings.max_text_length}文字以内で入力してください。"
        )
    return _normalize(source.body)


# ---------------------------------------------------------------------------
# URL extractor
# ---------------------------------------------------------------------------

NON_CONTENT_TAGS = ["script", "style", "noscript", "template", "nav", "header", "footer", "aside"]


def is_supported_url(address: str) -> bool:
    try:
        parsed = urlparse((address or "").strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def html_to_text(html: Union[str, bytes]) -> str:
    """Bytes are decoded by BeautifulSoup, which honours a <meta charset> tag."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()
    root = soup.body or soup
    return _normalize(root.get_text(" "))


def _page_too_large() -> FetchFailed:
    return FetchFailed("ページのサイズが大きすぎるため、コンテンツを取得できませんでした。")


async def fetch_html(url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> bytes:
    headers = {"User-Agent": settings.fetch_user_agent}
    limit = settings.max_page_bytes
    body = bytearray()

    async with httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.fetch_timeout,
        transport=transport,
    ) as client:
        async with client.stream("GET", url, headers=headers) as response:
            response.raise_for_status()

            declared = response.headers.get("Content-Length", "")
            if declared.isdigit() and int(declared) > limit:
                raise _page_too_large()

            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > limit:
                    raise _page_too_large()

    return bytes(body)


async def extract_from_url(
    source: UrlInput,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    url = (source.address or "").strip()
    if not is_supported_url(url):
        raise InvalidInput("有効なURLを入力してください。")

    try:
        html = await fetch_html(url, transport=transport)
    except httpx.HTTPError as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        raise FetchFailed() from exc

    return html_to_text(html)


# ---------------------------------------------------------------------------
# Image extractor
# ---------------------------------------------------------------------------

def _run_ocr(data: bytes) -> str:
    """Decode the image and run Tesseract over the whole frame.
    Synchronous: always call via asyncio.to_thread."""
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        return pytesseract.image_to_string(
            image,
            lang=settings.ocr_language,
            timeout=settings.ocr_timeout,
        )


async def extract_from_image(source: ImageInput) -> str:
    if not source.data:
        raise InvalidInput("画像ファイルがありません。")
    if len(source.data) > settings.max_image_bytes:
        raise InvalidInput(
            f"画像ファイルが大きすぎます。{settings.max_image_bytes // (1024 * 1024)}MB以下の画像を選択してください。"
        )

    try:
        text = await asyncio.to_thread(_run_ocr, source.data)
    except (pytesseract.TesseractError, Image.DecompressionBombError, RuntimeError, OSError) as exc:
        logger.warning("OCR failed for %s upload: %s", source.mime_type, exc)
        raise OcrFailed() from exc

    return _normalize(text)


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

async def extract(source: InputVariant, transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    if isinstance(source, TextInput):
        return await extract_from_text(source)
    if isinstance(source, UrlInput):
        return await extract_from_url(source, transport=transport)
    if isinstance(source, ImageInput):
        return await extract_from_image(source)
    raise InvalidInput(f"未対応の入力形式です: {type(source).__name__}")


# ---------------------------------------------------------------------------
# Local testing
# ---------------------------------------------------------------------------

async def _main():
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m metagen.services.extractor_service <url or text>")
        return

    raw = " ".join(sys.argv[1:])
    source = UrlInput(address=raw) if raw.startswith(("http://", "https://")) else TextInput(body=raw)
    print(await extract(source))


if __name__ == "__main__":
    asyncio.run(_main())
