import pytest

from conftest import FakeGenerationClient
from metagen.models.generation import GenerationResult, GenerationTask, TextInput, UrlInput
from metagen.services.errors import AuthError, InsufficientContent, InvalidInput, ModelWarming
from metagen.services.pipeline_service import generate_meta


@pytest.mark.asyncio
async def test_long_text_generates_title_then_description(article, fake_client):
    result = await generate_meta(TextInput(body=article), fake_client)

    assert result == GenerationResult(
        title="都内で楽しむスペシャルティコーヒー入門",
        description="話題のロースタリーカフェと自宅で楽しむハンドドリップのコツを紹介します。",
    )
    assert [task for _, task in fake_client.calls] == [GenerationTask.TITLE, GenerationTask.DESCRIPTION]


@pytest.mark.asyncio
async def test_generation_receives_normalized_content(fake_client):
    body = "  コーヒー\n\n" + "豆の  選び方 " * 10
    await generate_meta(TextInput(body=body), fake_client)

    content, _ = fake_client.calls[0]
    assert content == content.strip()
    assert "  " not in content and "\n" not in content


@pytest.mark.asyncio
async def test_short_text_is_rejected_without_generation(fake_client):
    with pytest.raises(InsufficientContent) as excinfo:
        await generate_meta(TextInput(body="短すぎる本文です。"), fake_client)
    assert excinfo.value.min_length == 50
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_length_is_measured_after_whitespace_collapse(fake_client):
    body = "あ " + " " * 200 + "い" * 47
    with pytest.raises(InsufficientContent):
        await generate_meta(TextInput(body=body), fake_client)
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_exactly_minimum_length_is_accepted(fake_client):
    await generate_meta(TextInput(body="あ" * 50), fake_client)
    assert len(fake_client.calls) == 2


@pytest.mark.asyncio
async def test_title_failure_skips_description(article):
    client = FakeGenerationClient(fail_on={GenerationTask.TITLE: AuthError()})
    with pytest.raises(AuthError):
        await generate_meta(TextInput(body=article), client)
    assert [task for _, task in client.calls] == [GenerationTask.TITLE]


@pytest.mark.asyncio
async def test_description_failure_discards_title(article):
    client = FakeGenerationClient(fail_on={GenerationTask.DESCRIPTION: ModelWarming()})
    with pytest.raises(ModelWarming):
        await generate_meta(TextInput(body=article), client)
    assert len(client.calls) == 2


@pytest.mark.asyncio
async def test_extractor_failure_propagates(fake_client):
    with pytest.raises(InvalidInput):
        await generate_meta(UrlInput(address="not-a-url"), fake_client)
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_same_input_gives_same_result(article):
    first = await generate_meta(TextInput(body=article), FakeGenerationClient())
    second = await generate_meta(TextInput(body=article), FakeGenerationClient())
    assert first == second
