# backend/app/services/ai.py
import time
from typing import Dict, List, Optional, Tuple

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings, settings
from ..models.document import DocumentType
from ..utils.logging import ai_logger

COLOR_PALETTE = (
    "#e5e3d4 (cream/beige), #9abf80 (mint green), "
    "#6a669d (lavender), and #1c325b (navy blue)"
)

SYSTEM_PROMPT = (
    "You are an expert product manager and technical architect with extensive experience in "
    "software development. Your task is to create detailed, well-structured product documentation "
    f"in HTML format using the color palette of {COLOR_PALETTE} when possible. "
    "Add CSS classes to make the content visually appealing."
)

# (opening request, document label, required sections) per document type
PROMPT_OUTLINES: Dict[DocumentType, Tuple[str, str, List[str]]] = {
    DocumentType.ROADMAP: (
        "Generate a detailed product roadmap for a",
        "roadmap",
        [
            "A high-level product vision",
            "Phased development timeline (MVP, v1, v2, future)",
            "Key milestones for each phase",
            "Features and capabilities for each phase",
            "Market and user value for each phase",
            "Success metrics for each phase",
        ],
    ),
    DocumentType.MVP: (
        "Generate a detailed MVP blueprint for a",
        "MVP blueprint",
        [
            "Core problem and solution definition",
            "Target user personas (with detailed descriptions)",
            "Essential features for the MVP (with clear justification)",
            "Features excluded from MVP (with rationale)",
            "User journey through the MVP",
            "Success criteria and KPIs",
            "Timeline estimation",
        ],
    ),
    DocumentType.ARCHITECTURE: (
        "Generate a detailed technical architecture design for a",
        "architecture design",
        [
            "High-level architecture overview (with recommended patterns)",
            "Frontend architecture (technologies, frameworks, state management)",
            "Backend architecture (API design, business logic, services)",
            "Data model and database recommendations",
            "Security considerations",
            "Scalability and performance considerations",
            "Third-party integrations",
            "Deployment and infrastructure recommendations",
        ],
    ),
    DocumentType.PLAN: (
        "Generate a detailed project plan for developing a",
        "project plan",
        [
            "Project scope and objectives",
            "Team composition and roles",
            "Detailed project phases (discovery, design, development, testing, deployment)",
            "Timeline with milestones",
            "Risk assessment and mitigation strategies",
            "Resource planning",
            "Quality assurance approach",
            "Communication and reporting plan",
        ],
    ),
}

FALLBACK_MARKER = "AI Generation Error"
DEFAULT_FALLBACK_MESSAGE = "Failed to generate content using AI. Please try again later."


class AIGenerationError(RuntimeError):
    """Raised when the completion API fails or returns nothing usable"""

    def __init__(self, message: str, document_type: Optional[DocumentType] = None):
        self.document_type = document_type
        super().__init__(message)


def fallback_content(message: str = DEFAULT_FALLBACK_MESSAGE) -> str:
    """HTML block shown in place of a document when AI generation failed"""
    return f"""
    <div class="ai-error-message">
      <h2>{FALLBACK_MARKER}</h2>
      <p>{message}</p>
      <p>Please try again later or contact support if the problem persists.</p>
    </div>
    """


def is_fallback_content(content: str) -> bool:
    return 'class="ai-error-message"' in content and FALLBACK_MARKER in content


def build_prompt(project, document_type) -> str:
    """Build the user prompt for one document type"""
    document_type = DocumentType.parse(document_type)
    opening, label, sections = PROMPT_OUTLINES[document_type]
    numbered = "\n".join(f"    {i}. {section}" for i, section in enumerate(sections, start=1))

    return f"""
    {opening} {project.type} in the {project.industry or "general"} industry.
    The product name is "{project.name}" and it is described as: "{project.description or "No description provided"}".

    The {label} should include:
{numbered}

    Format the response as HTML that can be directly inserted into a web page. Use h1, h2, h3 tags for titles, p tags for paragraphs,
    ul and li for lists, and other appropriate HTML elements. Use the color palette: {COLOR_PALETTE}
    throughout the document with CSS classes or inline styles.
    Make it visually structured and professional.
    """


class AIGenerator:
    """Generates planning documents through the OpenAI chat completions API"""

    def __init__(
            self,
            api_key: Optional[str] = None,
            model: str = "gpt-4o",
            temperature: float = 0.7,
            max_tokens: int = 2500,
            timeout: Optional[float] = None,
            client: Optional[AsyncOpenAI] = None
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout)
        ai_logger.info("AI generator initialized", extra={
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens
        })

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "AIGenerator":
        return cls(
            api_key=config.OPENAI_API_KEY,
            model=config.OPENAI_MODEL,
            temperature=config.OPENAI_TEMPERATURE,
            max_tokens=config.OPENAI_MAX_TOKENS,
            timeout=config.OPENAI_TIMEOUT
        )

    async def generate(self, project, document_type) -> str:
        """Generate HTML for a document type.

        Raises AIGenerationError on any API failure or an empty completion.
        """
        document_type = DocumentType.parse(document_type)
        prompt = build_prompt(project, document_type)
        start_time = time.perf_counter()

        ai_logger.info("Requesting AI completion", extra={
            "project_name": project.name,
            "document_type": document_type.value,
            "model": self.model,
            "prompt_length": len(prompt)
        })

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt}
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            ai_logger.error("AI completion request failed", extra={
                "document_type": document_type.value,
                "error_type": type(e).__name__,
                "error": str(e)
            })
            raise AIGenerationError(f"AI completion failed: {e}", document_type) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            ai_logger.warning("AI completion returned no content", extra={
                "document_type": document_type.value
            })
            raise AIGenerationError("AI completion returned no content", document_type)

        elapsed_time = time.perf_counter() - start_time
        ai_logger.info("AI completion received", extra={
            "document_type": document_type.value,
            "content_length": len(content),
            "generation_time_ms": round(elapsed_time * 1000, 2)
        })
        return content

    async def generate_with_fallback(self, project, document_type) -> str:
        """Like generate(), but returns the fixed error block instead of raising"""
        try:
            return await self.generate(project, document_type)
        except AIGenerationError as e:
            ai_logger.warning("Returning AI fallback content", extra={"error": str(e)})
            return fallback_content()
