# tests/services/test_generator.py
import pytest
from openai import OpenAIError

from app.config import Settings
from app.models.document import DocumentType, UnsupportedDocumentTypeError
from app.services.ai import AIGenerator, fallback_content
from app.services.generator import DocumentGenerator, document_name
from app.services.templates import render_template


class ExplodingAIGenerator:
    """AI generator double that fails with an arbitrary exception"""

    def __init__(self, error):
        self.error = error
        self.calls = 0

    async def generate(self, project, document_type):
        self.calls += 1
        raise self.error


@pytest.fixture
def project(mem_storage, acme_project):
    return mem_storage.create_project(acme_project)


@pytest.mark.asyncio
async def test_acme_mvp_without_ai(mem_storage, project, template_generator):
    document = await template_generator.generate_document(project, "mvp", mem_storage, use_ai=False)

    assert document.project_id == project.id
    assert document.type is DocumentType.MVP
    assert document.name == "Acme Tracker - MVP Blueprint"
    assert "Secure transaction processing" in document.content
    assert "Acme Tracker" in document.content
    assert mem_storage.get_documents_by_project(project.id) == [document]


@pytest.mark.asyncio
@pytest.mark.parametrize("document_type", list(DocumentType))
async def test_without_key_matches_template(mem_storage, project, template_generator, document_type):
    document = await template_generator.generate_document(project, document_type.value, mem_storage)
    assert document.content == render_template(project, document_type)


@pytest.mark.asyncio
async def test_use_ai_false_never_calls_ai(mem_storage, project, fake_openai_client):
    fake = fake_openai_client()
    generator = DocumentGenerator(ai_generator=AIGenerator(client=fake))

    document = await generator.generate_document(project, DocumentType.ROADMAP, mem_storage, use_ai=False)

    assert fake.completions.calls == []
    assert document.content == render_template(project, DocumentType.ROADMAP)


@pytest.mark.asyncio
async def test_uses_ai_when_configured(mem_storage, project, fake_openai_client):
    fake = fake_openai_client(content="<h1>AI Architecture</h1>")
    generator = DocumentGenerator(ai_generator=AIGenerator(client=fake))

    document = await generator.generate_document(project, "architecture", mem_storage)

    assert len(fake.completions.calls) == 1
    assert document.content == "<h1>AI Architecture</h1>"
    assert document.name == "Acme Tracker - Architecture Design"


@pytest.mark.asyncio
async def test_ai_failure_falls_back_to_template(mem_storage, project, fake_openai_client):
    generator = DocumentGenerator(
        ai_generator=AIGenerator(client=fake_openai_client(error=OpenAIError("service unavailable")))
    )

    document = await generator.generate_document(project, "plan", mem_storage)

    assert document.content == render_template(project, "plan")
    assert document.content != fallback_content()


@pytest.mark.asyncio
async def test_unexpected_ai_exception_falls_back(mem_storage, project):
    exploding = ExplodingAIGenerator(ConnectionResetError("socket closed"))
    generator = DocumentGenerator(ai_generator=exploding)

    document = await generator.generate_document(project, "roadmap", mem_storage)

    assert exploding.calls == 1
    assert document.content == render_template(project, "roadmap")


@pytest.mark.asyncio
async def test_unsupported_type_creates_nothing(mem_storage, project, template_generator):
    with pytest.raises(UnsupportedDocumentTypeError):
        await template_generator.generate_document(project, "summary", mem_storage, use_ai=False)

    assert mem_storage.get_documents_by_project(project.id) == []


@pytest.mark.asyncio
async def test_duplicates_accumulate(mem_storage, project, template_generator):
    first = await template_generator.generate_document(project, "roadmap", mem_storage)
    second = await template_generator.generate_document(project, "roadmap", mem_storage)

    assert first.id != second.id
    assert len(mem_storage.get_documents_by_project(project.id)) == 2


@pytest.mark.asyncio
async def test_delete_project_cascades_generated_documents(mem_storage, project, template_generator):
    await template_generator.generate_document(project, "roadmap", mem_storage)
    await template_generator.generate_document(project, "mvp", mem_storage)

    mem_storage.delete_project(project.id)

    assert mem_storage.get_documents_by_project(project.id) == []
    assert all(d.project_id != project.id for d in mem_storage.documents.values())


@pytest.mark.asyncio
async def test_generate_with_sql_storage(sql_storage, acme_project, template_generator):
    project = sql_storage.create_project(acme_project)

    document = await template_generator.generate_document(project, "plan", sql_storage)

    stored = sql_storage.get_document(document.id)
    assert stored.content == document.content
    assert stored.type is DocumentType.PLAN


def test_document_names():
    class Named:
        name = "Orbit"

    assert document_name(Named, DocumentType.ROADMAP) == "Orbit - Product Roadmap"
    assert document_name(Named, DocumentType.PLAN) == "Orbit - Project Plan"


def test_from_settings_without_key():
    assert not DocumentGenerator.from_settings(Settings(OPENAI_API_KEY=None)).ai_enabled
    assert not DocumentGenerator.from_settings(Settings(OPENAI_API_KEY="  ")).ai_enabled


def test_from_settings_with_key():
    generator = DocumentGenerator.from_settings(Settings(OPENAI_API_KEY="sk-test"))
    assert generator.ai_enabled
    assert isinstance(generator.ai_generator, AIGenerator)
