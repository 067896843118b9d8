# tests/conftest.py
from types import SimpleNamespace
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from pathlib import Path
import shutil
import tempfile
import os

from app.main import app
from app.database import Base, get_db
from app.models import Project, Document
from app.config import settings
from app.services.ai import AIGenerator
from app.services.generator import DocumentGenerator, get_document_generator
from app.storage import MemStorage, SQLStorage
from app.schemas.project import ProjectCreate

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    Path(temp_dir, "logs").mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)

@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original_storage = settings.STORAGE_PATH
    original_logs = settings.LOGS_PATH
    original_key = settings.OPENAI_API_KEY

    settings.STORAGE_PATH = temp_storage_dir
    settings.LOGS_PATH = temp_storage_dir / "logs"
    settings.OPENAI_API_KEY = None

    yield

    settings.STORAGE_PATH = original_storage
    settings.LOGS_PATH = original_logs
    settings.OPENAI_API_KEY = original_key

class FakeCompletions:
    """Stands in for client.chat.completions of the OpenAI SDK"""

    def __init__(self, content="<h1>AI Generated Content</h1>", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

class FakeOpenAIClient:
    def __init__(self, content="<h1>AI Generated Content</h1>", error=None):
        self.completions = FakeCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)

@pytest.fixture
def fake_openai_client():
    """Factory for fake OpenAI clients returning fixed content or raising"""
    def _create(content="<h1>AI Generated Content</h1>", error=None):
        return FakeOpenAIClient(content=content, error=error)
    return _create

@pytest.fixture
def template_generator():
    """Document generator without an OpenAI key"""
    return DocumentGenerator()

@pytest.fixture
def client(db_session, template_generator):
    """Test client using the test database and template-only generation"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_generator] = lambda: template_generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def fake_ai(fake_openai_client):
    return fake_openai_client(content="<h1>Fresh AI Roadmap</h1>")

@pytest.fixture
def ai_client(client, fake_ai):
    """Test client whose generator calls a fake OpenAI client"""
    generator = DocumentGenerator(ai_generator=AIGenerator(client=fake_ai))
    app.dependency_overrides[get_document_generator] = lambda: generator
    return client

@pytest.fixture
def mem_storage():
    return MemStorage()

@pytest.fixture
def sql_storage(db_session):
    return SQLStorage(db_session)

@pytest.fixture
def acme_project():
    """Project payload used across generation tests"""
    return ProjectCreate(
        name="Acme Tracker",
        description="Expense tracking for small teams",
        type="saas",
        industry="finance"
    )

@pytest.fixture
def sample_project(db_session):
    """Create a sample project"""
    project = Project(
        name="Test Project",
        description="Test Description",
        type="web-application",
        industry="retail"
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def sample_document(db_session, sample_project):
    """Create a sample document"""
    document = Document(
        name="Test Project - Product Roadmap",
        type="roadmap",
        content="<h1>Product Roadmap: Test Project</h1><h2>Phase 1</h2><ul><li>Launch</li></ul>",
        project_id=sample_project.id
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    for file in ["test.db", "blueprint.db"]:
        if os.path.exists(file):
            os.remove(file)
