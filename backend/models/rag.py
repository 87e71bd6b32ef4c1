"""Request and response models for the retrieval-augmented answer flow."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RagRequest:
    """User prompt with an optional model override and generation options."""
    prompt: str
    model: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ChatResponse:
    """Final answer text and the model that produced it."""
    model: Optional[str]
    text: str
