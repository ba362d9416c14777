# a2a_codegen/core/prompts.py
"""
Prompts used by the generation pipeline.

Goals:
- Force a JSON-only {"files": [...]} payload the backend can parse.
- Pin the generated server to a2a-sdk 0.3.0 + the OpenAI responses API.
- Communicate the four-file convention (main.py, requirements.txt, README.md, .env.example).
"""

import json
from typing import Tuple

from ..models import GenerationRequest

OUTPUT_SHAPE = '{"files":[{"path":"...","content":"..."}]}'

_MAIN_PY_SKELETON = '''\
import os
import uvicorn
import openai
from a2a.server.apps import A2AStarletteApplication
from a2a.server.request_handlers import DefaultRequestHandler
from a2a.server.tasks import InMemoryTaskStore
from a2a.types import AgentCapabilities, AgentCard, AgentSkill
from a2a.server.agent_execution import AgentExecutor, RequestContext
from a2a.server.events import EventQueue
from a2a.utils import new_agent_text_message
from dotenv import load_dotenv

load_dotenv()

class OpenAIAgentExecutor(AgentExecutor):
    def __init__(self):
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")
        self.client = openai.AsyncOpenAI(api_key=api_key)
        self.model = os.getenv("OPENAI_MODEL", "gpt-5")
        self.system_prompt = os.getenv("SYSTEM_PROMPT", "You are a helpful AI assistant.")
        self.reasoning_effort = os.getenv("REASONING_EFFORT", "medium")

    async def execute(self, context: RequestContext, event_queue: EventQueue) -> None:
        user_input = context.get_user_input()
        if not user_input or not str(user_input).strip():
            await event_queue.enqueue_event(new_agent_text_message("I didn't receive any input to process."))
            return
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=str(user_input),
                instructions=self.system_prompt,
                reasoning={"effort": self.reasoning_effort},
            )
            response_text = response.output_text or ""
            if not response_text:
                for output_item in response.output or []:
                    for content_item in getattr(output_item, "content", None) or []:
                        text = getattr(content_item, "text", None)
                        if text is not None:
                            response_text += getattr(text, "value", None) or str(text)
            if not response_text:
                response_text = "I couldn't generate a proper response. Please try again."
            await event_queue.enqueue_event(new_agent_text_message(response_text))
        except openai.APIError as e:
            await event_queue.enqueue_event(new_agent_text_message(f"OpenAI API error: {e}"))

    async def cancel(self, context: RequestContext, event_queue: EventQueue) -> None:
        raise Exception("Cancel operation not supported")

if __name__ == "__main__":
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "9000"))
    AGENT_NAME = os.getenv("AGENT_NAME", "OpenAI Assistant")
    AGENT_DESCRIPTION = os.getenv("AGENT_DESCRIPTION", "An AI assistant powered by OpenAI")

    skill = AgentSkill(
        id="openai_assistant",
        name="AI Assistant",
        description="Provides intelligent responses using OpenAI models with reasoning capabilities",
        tags=["ai", "assistant", "openai", "reasoning"],
        examples=["Help me with a question", "Solve this problem", "Explain this concept"],
    )
    agent_card = AgentCard(
        name=AGENT_NAME,
        description=AGENT_DESCRIPTION,
        url=f"http://{HOST}:{PORT}/",
        version="1.0.0",
        default_input_modes=["text"],
        default_output_modes=["text"],
        capabilities=AgentCapabilities(streaming=True),
        skills=[skill],
    )
    request_handler = DefaultRequestHandler(
        agent_executor=OpenAIAgentExecutor(),
        task_store=InMemoryTaskStore(),
    )
    server = A2AStarletteApplication(agent_card=agent_card, http_handler=request_handler)
    uvicorn.run(server.build(), host=HOST, port=PORT)
'''

_REQUIREMENTS_TXT = """\
a2a-sdk>=0.3.0
openai>=1.0.0
uvicorn[standard]>=0.24.0
python-dotenv
"""

_ENV_EXAMPLE = """\
HOST=0.0.0.0
PORT=9000
LOG_LEVEL=INFO
OPENAI_API_KEY=your_openai_api_key_here
OPENAI_MODEL=gpt-5
REASONING_EFFORT=medium
SYSTEM_PROMPT=You are a helpful AI assistant.
AGENT_NAME=OpenAI Assistant
AGENT_DESCRIPTION=An intelligent assistant powered by OpenAI with reasoning capabilities
"""


def _build_system_prompt() -> str:
    return "\n".join([
        "You are an expert Python engineer who specializes in the A2A (Agent-to-Agent) Protocol. "
        "Generate a minimal, production-ready A2A server using the official a2a-sdk Python package "
        "(version 0.3.0) that integrates with OpenAI's responses API, strictly complying with the "
        "A2A Protocol specification.",
        "",
        "CRITICAL REQUIREMENTS - USE a2a-sdk 0.3.0 WITH OPENAI RESPONSES API:",
        "",
        "1. IMPORTS:",
        "- from a2a.server.apps import A2AStarletteApplication",
        "- from a2a.server.request_handlers import DefaultRequestHandler",
        "- from a2a.server.tasks import InMemoryTaskStore",
        "- from a2a.types import AgentCapabilities, AgentCard, AgentSkill",
        "- from a2a.server.agent_execution import AgentExecutor, RequestContext",
        "- from a2a.server.events import EventQueue",
        "- from a2a.utils import new_agent_text_message",
        "- import openai, os; from dotenv import load_dotenv",
        "",
        "2. OPENAI RESPONSES API INTEGRATION:",
        "- Use the async OpenAI client and client.responses.create()",
        "- Read the API key, model, system prompt and reasoning effort from environment variables",
        "- Handle OpenAI API errors gracefully and report them as agent text messages",
        "",
        "3. AGENT EXECUTOR:",
        "- Subclass AgentExecutor and implement execute() and cancel()",
        "- Pass user input and instructions to the responses API inside execute()",
        "- IMPORTANT: event_queue.enqueue_event() is async and must be awaited",
        "- Read output_text first, then fall back to the nested output[].content[].text fragments",
        "",
        "4. REQUIRED FILES (EXACTLY 4 FILES):",
        "- main.py: A2A server with OpenAI responses API integration",
        "- requirements.txt: a2a-sdk, openai, python-dotenv and other dependencies",
        "- README.md: setup instructions including the OpenAI API key",
        "- .env.example: environment variables including OPENAI_API_KEY",
        "",
        "MAIN.PY STRUCTURE:",
        _MAIN_PY_SKELETON,
        "REQUIREMENTS.TXT:",
        _REQUIREMENTS_TXT,
        ".ENV.EXAMPLE:",
        _ENV_EXAMPLE,
        "Tailor the agent card, skills, examples and default system prompt to the agent description "
        "and wire the listed services into the executor where relevant.",
        "",
        "OUTPUT FORMAT:",
        "Return ONLY a JSON object exactly like:",
        '{"files":[{"path":"main.py","content":"..."},{"path":"requirements.txt","content":"..."},'
        '{"path":"README.md","content":"..."},{"path":".env.example","content":"..."}]}',
        "No code fences. No extra keys. EXACTLY 4 files.",
    ])


SYSTEM_PROMPT = _build_system_prompt()


def build_user_prompt(request: GenerationRequest) -> str:
    """
    Per-request prompt body: agent description, services map, and the restated output rule.
    """
    try:
        services_json = json.dumps(request.services or {}, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        services_json = str(request.services)

    return "\n\n".join([
        f"Agent Description:\n{request.agent_description or '(none provided)'}",
        f"Services:\n{services_json}",
        f"Output ONLY: {OUTPUT_SHAPE}",
    ])


def build_prompts(request: GenerationRequest) -> Tuple[str, str]:
    return SYSTEM_PROMPT, build_user_prompt(request)
