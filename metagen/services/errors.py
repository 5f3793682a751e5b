"""Failure kinds raised by the extraction and generation pipeline.

Every error carries a user-facing message (Japanese, like the generated
output) and the HTTP status the API layer renders it with.
"""

from typing import Optional


class PipelineError(Exception):
    kind = "PipelineError"
    status_code = 500
    default_message = "不明なサーバーエラーです。"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(PipelineError):
    kind = "InvalidInput"
    status_code = 422
    default_message = "入力内容が正しくありません。"


class FetchFailed(PipelineError):
    kind = "FetchFailed"
    default_message = (
        "URLからのコンテンツ取得に失敗しました。"
        "サイトが存在しないか、アクセスがブロックされている可能性があります。"
    )


class OcrFailed(PipelineError):
    kind = "OcrFailed"
    default_message = "画像からのテキスト抽出（OCR）に失敗しました。"


class InsufficientContent(PipelineError):
    kind = "InsufficientContent"
    status_code = 422

    def __init__(self, min_length: int = 50, message: Optional[str] = None):
        self.min_length = min_length
        super().__init__(
            message
            or f"生成するにはコンテンツが短すぎます。{min_length}文字以上の日本語テキストを入力してください。"
        )


class AuthError(PipelineError):
    kind = "AuthError"
    default_message = "Hugging Face APIの認証に失敗しました。APIキーが正しいか確認してください。"


class ModelWarming(PipelineError):
    kind = "ModelWarming"
    default_message = "AIモデルを準備中です。少し待ってからもう一度お試しください。"


class GenerationTimeout(PipelineError):
    kind = "Timeout"
    default_message = "AIの応答がタイムアウトしました。サーバーが混み合っている可能性があります。"


class ProviderError(PipelineError):
    kind = "ProviderError"

    def __init__(self, provider_message: str):
        self.provider_message = provider_message
        super().__init__(f"AI APIエラー: {provider_message}")


class UnknownGenerationError(PipelineError):
    kind = "UnknownGenerationError"

    def __init__(self, task: str, message: Optional[str] = None):
        self.task = task
        super().__init__(message or f"AIによる{task}の生成中に予期せぬエラーが発生しました。")


class MissingCredential(PipelineError):
    kind = "MissingCredential"
    status_code = 503
    default_message = "APIキーがサーバーに設定されていません。"
