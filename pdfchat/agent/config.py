"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the Bedrock chat clients. Read once at
startup and frozen afterwards.
"""

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdfchat.models.schemas import InferenceParams

# Load environment variables from .env file
load_dotenv()

DEFAULT_SYSTEM_PROMPT = "You are a friendly assistant!"


def _optional_env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


class ChatConfig(BaseModel):
    """Configuration for the Bedrock chat clients.

    Attributes:
        provider: Which client wrapper to use ("converse" or "agno").
        aws_access_key_id: Access key (None to use the boto3 default chain).
        aws_secret_access_key: Secret key paired with the access key.
        aws_region: AWS region hosting the model.
        model_id: Bedrock model identifier.
        system_prompt: System instruction sent with every request.
        temperature: Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens: Maximum tokens in generated response.
    """

    model_config = ConfigDict(frozen=True)

    provider: Literal["converse", "agno"] = Field(
        default_factory=lambda: os.getenv("CHAT_PROVIDER", "converse").strip().lower(),
        description="Client wrapper used to call Bedrock",
    )
    aws_access_key_id: str | None = Field(
        default_factory=lambda: _optional_env("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID",
    )
    aws_secret_access_key: str | None = Field(
        default_factory=lambda: _optional_env("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key",
    )
    aws_region: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", ""),
        description="AWS region of the Bedrock endpoint",
    )
    model_id: str = Field(
        default_factory=lambda: os.getenv("AWS_BEDROCK_MODEL_ID", ""),
        description="Bedrock model identifier",
    )
    system_prompt: str = Field(
        default_factory=lambda: os.getenv("CHAT_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT),
        description="System instruction for every request",
    )
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("CHAT_TEMPERATURE", "0.7")),
        ge=0.0,
        le=1.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("CHAT_MAX_TOKENS", "2048")),
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )

    @field_validator("aws_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate that a region is provided."""
        if not v or not v.strip():
            raise ValueError("AWS region required. Set AWS_REGION in .env")
        return v.strip()

    @field_validator("model_id")
    @classmethod
    def validate_model_id(cls, v: str) -> str:
        """Validate that a model identifier is provided."""
        if not v or not v.strip():
            raise ValueError("Model ID required. Set AWS_BEDROCK_MODEL_ID in .env")
        return v.strip()

    @property
    def inference_params(self) -> InferenceParams:
        return InferenceParams(max_tokens=self.max_tokens, temperature=self.temperature)


@lru_cache
def get_chat_config() -> ChatConfig:
    """Load chat configuration from environment, once per process.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If region or model ID is missing.
    """
    return ChatConfig()
