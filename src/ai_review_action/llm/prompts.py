"""
Prompt Builder

Builds the per-hunk review prompt: reviewer persona and guidelines,
the required JSON response shape, pull request context and the hunk
with every line prefixed by its line number.
"""

import logging
from typing import Dict

from ..models.pr_diff import Chunk, DiffFile
from ..models.review import PullRequestContext


logger = logging.getLogger(__name__)

RESPONSE_SCHEMA = '{"reviews": [{"lineNumber": <line_number>, "reviewComment": "<review comment>"}]}'


class PromptBuilder:
    """
    Builds review prompts for one diff hunk at a time.

    The wording of the guidelines is policy; the JSON schema line and
    the "empty reviews array when nothing to improve" rule are what the
    response parser relies on.
    """

    def __init__(self, language: str = "english"):
        """
        Initialize prompt builder.

        Args:
            language: Language of the instructions ("english" or "spanish")
        """
        self.templates = self._load_templates()
        if language not in self.templates:
            raise ValueError(f"Unsupported prompt language: {language}")
        self.language = language

    def build_review_prompt(self, diff_file: DiffFile, chunk: Chunk, context: PullRequestContext) -> str:
        """
        Build complete review prompt for a single hunk.

        Args:
            diff_file: File the hunk belongs to
            chunk: Hunk to review
            context: Pull request title/description

        Returns:
            Complete prompt string
        """
        logger.debug(f"Building review prompt for {diff_file.target_path} {chunk.content}")

        template = self.templates[self.language]

        sections = [
            template["system_prompt"],
            template["review_guidelines"],
            template["output_format"].format(schema=RESPONSE_SCHEMA),
            template["file_header"].format(path=diff_file.target_path),
            template["pr_context"].format(title=context.title, description=context.description),
            template["diff_header"],
            self.format_chunk(chunk),
        ]
        return "\n\n".join(sections) + "\n"

    def format_chunk(self, chunk: Chunk) -> str:
        """Render the hunk as a fenced diff block with numbered lines."""
        lines = [chunk.content]
        lines.extend(f"{change.line_number} {change.content}" for change in chunk.changes)
        return "```diff\n" + "\n".join(lines) + "\n```"

    def _load_templates(self) -> Dict[str, Dict[str, str]]:
        """Load prompt templates for different languages."""
        return {
            "english": {
                "system_prompt": """You are an expert full-stack code reviewer with deep knowledge of software engineering principles and web development best practices. Your task is to review code changes and give constructive feedback that improves their quality.""",

                "review_guidelines": """**Review Guidelines**:
- Readability and simplicity: flag needlessly complex sections and suggest simplifications.
- Naming and consistency: names of variables, functions, classes and files should be descriptive and follow the language's conventions.
- Structure and modularity: point out mixed responsibilities and suggest a better separation.
- Error handling and validation: check error handling around asynchronous calls, I/O and user input.
- Efficiency: identify unnecessary or unoptimized work, queries and allocations.
- Testability: favor pure functions and decoupled logic.
- Potential bugs and edge cases: logic errors, unhandled states, empty data, null values, network failures.

For every problem, explain what is wrong and why, give a specific suggestion, and include a short code snippet when it helps.""",

                "output_format": """**Instructions**:
- Provide the response in the following JSON format: {schema}
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comments in GitHub Markdown format.
- Use the given description only for the overall context and only comment the code.
- IMPORTANT: NEVER suggest adding comments to the code.""",

                "file_header": """Review the following code diff in the file "{path}" and take the pull request title and description into account when writing the response.""",

                "pr_context": """Pull request title: {title}
Pull request description:

---
{description}
---""",

                "diff_header": "Git diff to review:",
            },
            "spanish": {
                "system_prompt": """Eres un experto revisor de código full stack, con un profundo conocimiento de principios de ingeniería de software y mejores prácticas en desarrollo web. Tu tarea es revisar fragmentos de código y proporcionar comentarios constructivos para mejorar su calidad.""",

                "review_guidelines": """**Pautas de revisión**:
- Legibilidad y simplicidad: identifica secciones innecesariamente complejas y sugiere simplificaciones.
- Convenciones de nombres y consistencia: los nombres deben ser descriptivos y seguir las convenciones del lenguaje.
- Estructura y modularidad: sugiere una mejor separación de responsabilidades si hay lógica mezclada.
- Manejo de errores y validación de datos: verifica el manejo de errores en llamadas asincrónicas y la validación de entradas.
- Eficiencia y rendimiento: identifica trabajo innecesario o no optimizado.
- Testabilidad: evalúa si el código es fácilmente testeable.
- Errores potenciales y casos límite: datos vacíos, errores de red, valores nulos.

Para cada problema, explica claramente el problema y por qué lo es, proporciona una sugerencia específica y, si corresponde, un fragmento de código.""",

                "output_format": """**Instrucciones**:
- Proporciona la respuesta en el siguiente formato JSON: {schema}
- No des comentarios positivos ni cumplidos.
- Proporciona comentarios y sugerencias solo si hay algo que mejorar, de lo contrario, "reviews" debe ser un array vacío.
- Escribe los comentarios en formato Markdown de GitHub.
- Usa la descripción general solo como contexto y comenta únicamente el código.
- IMPORTANTE: NUNCA sugieras añadir comentarios al código.""",

                "file_header": """Revisa el siguiente diff de código en el archivo "{path}" y ten en cuenta el título y la descripción del pull request al redactar tu respuesta.""",

                "pr_context": """Pull request title: {title}
Pull request description:

---
{description}
---""",

                "diff_header": "Git diff to review:",
            },
        }
