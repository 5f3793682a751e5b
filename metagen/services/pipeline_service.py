import logging
from typing import Optional

import httpx

from ..config import settings
from ..models.generation import GenerationResult, GenerationTask, InputVariant
from .errors import InsufficientContent
from .extractor_service import extract
from .generation_service import GenerationClient

logger = logging.getLogger(__name__)


async def generate_meta(
    source: InputVariant,
    client: GenerationClient,
    min_length: int = settings.min_content_length,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GenerationResult:
    """
    Extract text from the input, then ask the model for a title and a
    meta-description, one call each and in that order.
    The first failure propagates; no partial result is ever returned.
    """
    content = await extract(source, transport=transport)

    if len(content) < min_length:
        error = InsufficientContent(min_length)
        logger.info(
            "Rejected %s input: %d characters after normalization, %d required",
            source.input_type, len(content), error.min_length,
        )
        raise error

    logger.info("Generating title...")
    title = await client.generate(content, GenerationTask.TITLE)

    logger.info("Generating description...")
    description = await client.generate(content, GenerationTask.DESCRIPTION)

    return GenerationResult(title=title, description=description)
