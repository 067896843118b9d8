# tests/services/test_ai.py
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from app.config import Settings
from app.models.document import DocumentType
from app.services.ai import (
    AIGenerationError,
    AIGenerator,
    SYSTEM_PROMPT,
    build_prompt,
    fallback_content,
    is_fallback_content,
)


@pytest.fixture
def project():
    return SimpleNamespace(
        name="Acme Tracker",
        description=None,
        type="saas",
        industry=None,
    )


@pytest.mark.parametrize("document_type, section_count", [
    (DocumentType.ROADMAP, 6),
    (DocumentType.MVP, 7),
    (DocumentType.ARCHITECTURE, 8),
    (DocumentType.PLAN, 8),
])
def test_build_prompt(project, document_type, section_count):
    prompt = build_prompt(project, document_type)

    assert 'The product name is "Acme Tracker"' in prompt
    assert "saas in the general industry" in prompt
    assert "No description provided" in prompt
    assert f"{section_count}. " in prompt
    assert f"{section_count + 1}. " not in prompt
    for color in ["#e5e3d4", "#9abf80", "#6a669d", "#1c325b"]:
        assert color in prompt
    assert "Format the response as HTML" in prompt


@pytest.mark.asyncio
async def test_generate_sends_single_turn_request(project, fake_openai_client):
    fake = fake_openai_client(content="<h1>Roadmap</h1>")
    generator = AIGenerator(client=fake, model="gpt-4o", temperature=0.7, max_tokens=2500)

    content = await generator.generate(project, "roadmap")

    assert content == "<h1>Roadmap</h1>"
    call = fake.completions.calls[0]
    assert call["model"] == "gpt-4o"
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 2500
    assert call["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert call["messages"][1]["role"] == "user"
    assert "product roadmap" in call["messages"][1]["content"]


@pytest.mark.asyncio
async def test_generate_raises_on_api_error(project, fake_openai_client):
    generator = AIGenerator(client=fake_openai_client(error=OpenAIError("invalid api key")))

    with pytest.raises(AIGenerationError) as exc_info:
        await generator.generate(project, DocumentType.MVP)

    assert exc_info.value.document_type is DocumentType.MVP
    assert isinstance(exc_info.value.__cause__, OpenAIError)


@pytest.mark.asyncio
async def test_generate_raises_on_empty_content(project, fake_openai_client):
    generator = AIGenerator(client=fake_openai_client(content="   "))

    with pytest.raises(AIGenerationError):
        await generator.generate(project, "plan")


@pytest.mark.asyncio
async def test_generate_with_fallback_returns_error_block(project, fake_openai_client):
    generator = AIGenerator(client=fake_openai_client(error=OpenAIError("connection reset")))

    content = await generator.generate_with_fallback(project, "architecture")

    assert "AI Generation Error" in content
    assert is_fallback_content(content)


@pytest.mark.asyncio
async def test_generate_with_fallback_passes_through_success(project, fake_openai_client):
    generator = AIGenerator(client=fake_openai_client(content="<h1>Plan</h1>"))

    content = await generator.generate_with_fallback(project, "plan")

    assert content == "<h1>Plan</h1>"
    assert not is_fallback_content(content)


def test_fallback_content_message():
    content = fallback_content("Quota exceeded.")
    assert "<p>Quota exceeded.</p>" in content
    assert is_fallback_content(content)


def test_from_settings_uses_configured_model():
    config = Settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o-mini", OPENAI_MAX_TOKENS=1000)
    generator = AIGenerator.from_settings(config)

    assert generator.model == "gpt-4o-mini"
    assert generator.max_tokens == 1000
    assert generator.temperature == 0.7
