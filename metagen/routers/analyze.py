from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..config import settings
from ..models.generation import (
    ErrorResponse,
    GenerationResult,
    ImageInput,
    InputVariant,
    TextInput,
    UrlInput,
)
from ..services.errors import InvalidInput
from ..services.generation_service import GenerationClient
from ..services.pipeline_service import generate_meta

router = APIRouter(prefix="/api", tags=["Analyze"])


def get_generation_client() -> GenerationClient:
    return GenerationClient.from_settings(settings)


async def build_input_variant(
    input_type: Optional[str],
    content: Optional[str],
    url: Optional[str],
    image: Optional[UploadFile],
) -> InputVariant:
    if input_type == "text":
        if content is None:
            raise InvalidInput("記事本文を入力してください。")
        return TextInput(body=content)

    if input_type == "url":
        if not url:
            raise InvalidInput("有効なURLを入力してください。")
        return UrlInput(address=url)

    if input_type == "image":
        if image is None:
            raise InvalidInput("画像ファイルがありません。")
        data = await image.read(settings.max_image_bytes + 1)
        if not data:
            raise InvalidInput("画像ファイルがありません。")
        if len(data) > settings.max_image_bytes:
            raise InvalidInput(
                f"画像ファイルが大きすぎます。{settings.max_image_bytes // (1024 * 1024)}MB以下の画像を選択してください。"
            )
        return ImageInput(data=data, mime_type=image.content_type or "application/octet-stream")

    raise InvalidInput("inputType には text / url / image のいずれかを指定してください。")


@router.post(
    "/analyze",
    response_model=GenerationResult,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Generate an SEO title and meta-description",
    description=(
        "Accepts plain text, a page URL or an uploaded image (multipart form), extracts its text "
        "and asks the hosted model for a Japanese title and meta-description."
    ),
)
async def analyze(
    input_type: Optional[str] = Form(None, alias="inputType"),
    content: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    client: GenerationClient = Depends(get_generation_client),
) -> GenerationResult:
    source = await build_input_variant(input_type, content, url, image)
    return await generate_meta(source, client)
