"""Instruction templates for the SEO title and meta-description tasks.

The templates are wrapped in the ``[INST] ... [/INST]`` format expected by
the Mixtral instruct family and pin the answer language to Japanese; without
that clause the model drifts into English.
"""

from ..config import settings
from ..models.generation import GenerationTask, TaskSpec


TITLE_TEMPLATE = """[INST]あなたはプロのSEOコンサルタントです。以下の記事本文に最適な、30文字程度の短いタイトルを1つだけ、**必ず日本語で**考案してください。回答はタイトルのみとし、解説や前置き、記号（「」『』）は一切含めないでください。
# 記事本文
{content}[/INST]"""

DESCRIPTION_TEMPLATE = """[INST]あなたはプロのSEOコンサルタントです。以下の記事本文を120文字程度で要約し、読者が記事を読むメリットが伝わるような魅力的なメタディスクリプションを、**必ず日本語で**作成してください。回答はディスクリプションの文章のみとし、解説や前置き、記号（「」『』）は一切含めないでください。
# 記事本文
{content}[/INST]"""

QUOTE_GLYPHS = "\"'「」『』“”‘’«»"

TASK_SPECS: dict[GenerationTask, TaskSpec] = {
    GenerationTask.TITLE: TaskSpec(
        task=GenerationTask.TITLE,
        template=TITLE_TEMPLATE,
        max_new_tokens=settings.title_max_new_tokens,
        char_budget=settings.prompt_char_budget,
    ),
    GenerationTask.DESCRIPTION: TaskSpec(
        task=GenerationTask.DESCRIPTION,
        template=DESCRIPTION_TEMPLATE,
        max_new_tokens=settings.description_max_new_tokens,
        char_budget=settings.prompt_char_budget,
    ),
}


def get_task_spec(task: GenerationTask) -> TaskSpec:
    return TASK_SPECS[task]


def build_prompt(content: str, task: GenerationTask) -> str:
    spec = get_task_spec(task)
    return spec.template.format(content=content[: spec.char_budget])


def clean_generated_text(text: str) -> str:
    """Trim the model output and drop any quote glyphs wrapping it."""
    text = (text or "").strip()
    return text.strip(QUOTE_GLYPHS).strip()
