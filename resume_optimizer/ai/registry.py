from __future__ import annotations

from typing import Iterator, Sequence

from resume_optimizer.ai.types import OptimizationProvider


class ProviderRegistry:
    """Ordered, immutable set of remote providers, built once per process."""

    def __init__(self, providers: Sequence[OptimizationProvider]):
        self._providers = tuple(providers)
        names = [p.provider_id for p in self._providers]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate provider ids in registry: {names}")

    def __iter__(self) -> Iterator[OptimizationProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(p.provider_id for p in self._providers)

    def get(self, provider_id: str | None) -> OptimizationProvider | None:
        for provider in self._providers:
            if provider.provider_id == provider_id:
                return provider
        return None

    def available(self) -> list[OptimizationProvider]:
        return [p for p in self._providers if p.is_available()]

    def availability(self) -> dict[str, bool]:
        return {p.provider_id: p.is_available() for p in self._providers}
