import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper() or "INFO"

# Provider credential env vars (read when a facade is constructed, not here)
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
GOOGLE_API_KEY_ENV = "GOOGLE_API_KEY"
ANTHROPIC_API_KEY_ENV = "ANTHROPIC_API_KEY"

# Local OpenAI-compatible server (ollama) used for llama / deepseek models
LOCAL_LLM_BASE_URL = os.getenv("LOCAL_LLM_BASE_URL", "http://localhost:11434/v1")
# required by the SDK, ignored by the server
LOCAL_LLM_API_KEY = os.getenv("LOCAL_LLM_API_KEY", "junk")

# Anthropic has no default output ceiling; one must always be sent.
CLAUDE_MAX_TOKENS = 8192
