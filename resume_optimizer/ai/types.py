from dataclasses import dataclass
from typing import Literal, Protocol

from resume_optimizer.schemas.resume import OptimizationOptions, OptimizationResult


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class OptimizationProvider(Protocol):
    provider_id: str

    def is_available(self) -> bool: ...

    async def attempt_optimize(
        self, resume_text: str, language: str, options: OptimizationOptions
    ) -> OptimizationResult: ...
