import io
import json

import httpx
import pytest
from PIL import Image

from metagen.models.generation import GenerationTask
from metagen.services.errors import PipelineError

ARTICLE = (
    "東京都内のカフェでは近年、サードウェーブと呼ばれるスペシャルティコーヒーの人気が高まっている。"
    "産地や焙煎方法にこだわった一杯を提供する店舗が増え、若い世代を中心に新しいコーヒー文化が広がりつつある。"
    "本記事では、都内で話題のロースタリーカフェを巡りながら、豆の選び方や抽出方法の違い、"
    "自宅で楽しむためのハンドドリップのコツを詳しく紹介する。"
    "さらに、浅煎りと深煎りの味わいの違いや、季節ごとにおすすめしたいシングルオリジンの豆についても解説し、"
    "初心者でもすぐに実践できるポイントをまとめた。"
) * 3


class FakeGenerationClient:
    """Deterministic stand-in for GenerationClient that records every call."""

    def __init__(self, outputs=None, fail_on=None):
        self.outputs = outputs or {
            GenerationTask.TITLE: "都内で楽しむスペシャルティコーヒー入門",
            GenerationTask.DESCRIPTION: "話題のロースタリーカフェと自宅で楽しむハンドドリップのコツを紹介します。",
        }
        self.fail_on = fail_on or {}
        self.calls: list[tuple[str, GenerationTask]] = []

    async def generate(self, content: str, task: GenerationTask) -> str:
        self.calls.append((content, task))
        error = self.fail_on.get(task)
        if isinstance(error, PipelineError):
            raise error
        return self.outputs[task]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def inference_response(status_code: int = 200, body=None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body, ensure_ascii=False).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def article() -> str:
    return ARTICLE


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 16), color="white").save(buf, format="PNG")
    return buf.getvalue()
